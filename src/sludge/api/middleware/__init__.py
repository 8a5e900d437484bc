"""Middleware for request logging, CORS policy and error handling."""

from .cors import CORSHeadersMiddleware
from .error_handling import ErrorHandlingMiddleware
from .logging import LoggingMiddleware

__all__ = ["CORSHeadersMiddleware", "ErrorHandlingMiddleware", "LoggingMiddleware"]
