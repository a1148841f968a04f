"""HTTP primitives shared by routers."""

from .errors import app_error_handler, error_response

__all__ = ["app_error_handler", "error_response"]
