"""
Error response shaping.

Every error leaves the API as ``{"error": {"status": <code>,
"message": <string or list of strings>}}``.  HTTP exceptions raised by
handlers or by the router (unknown path, wrong method) keep their
status and detail; anything else becomes a generic 500.
"""

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def error_body(status_code: int, message: Any) -> Dict[str, Any]:
    """Build the error envelope returned for every failed request."""
    return {"error": {"status": status_code, "message": message}}


def error_response(status_code: int, message: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_body(status_code, message))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle anything the endpoints did not turn into an HTTP error."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    body = error_body(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")
    if request.app.state.settings.debug:
        body["error"]["detail"] = str(exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
