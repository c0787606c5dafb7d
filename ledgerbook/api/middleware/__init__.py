"""API middleware."""

from ledgerbook.api.middleware.error_handler import ErrorHandlerMiddleware
from ledgerbook.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
