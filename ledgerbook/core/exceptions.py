"""
Domain exceptions for the Ledgerbook application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class LedgerbookError(Exception):
    """Base exception for all Ledgerbook errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}


# Storage Exceptions
class StorageError(LedgerbookError):
    """Base exception for storage operations."""

    pass


class ProductNotFoundError(StorageError):
    """Product not found in inventory."""

    def __init__(self, product_id: str):
        super().__init__(
            f"Product not found: {product_id}",
            code="PRODUCT_NOT_FOUND",
            details={"product_id": product_id},
        )


class DocumentNotFoundError(StorageError):
    """Document not found in the document store."""

    def __init__(self, document_id: str):
        super().__init__(
            f"Document not found: {document_id}",
            code="DOCUMENT_NOT_FOUND",
            details={"document_id": document_id},
        )


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Validation Exceptions
class ValidationError(LedgerbookError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value else None,
            },
        )


class DraftValidationError(ValidationError):
    """Draft cannot be finalized into a document."""

    def __init__(self, problems: dict[str, str]):
        fields = ", ".join(problems)
        super().__init__(
            field=fields,
            message="; ".join(problems.values()),
        )
        self.code = "DRAFT_INCOMPLETE"
        self.problems = problems
        self.details["problems"] = problems


# Rendering Exceptions
class RenderError(LedgerbookError):
    """Document export failed."""

    def __init__(self, document_id: str, reason: str):
        super().__init__(
            f"Failed to render document {document_id}: {reason}",
            code="RENDER_FAILED",
            details={"document_id": document_id, "reason": reason},
        )
