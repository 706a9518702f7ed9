"""
API package containing the HTTP routes.

``router`` aggregates the domain routers from ``endpoints``; ``errors``
turns failures into the common error envelope.
"""
