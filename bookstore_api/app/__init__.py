"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (configuration, logging, store, validation),
``schemas`` (payload shapes), ``services`` (persistence) and ``api``
(routes and error shaping).
"""

from .main import app  # noqa: F401
