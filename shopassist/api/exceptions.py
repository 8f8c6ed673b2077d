"""Custom exceptions for the ShopAssist API.

Defines specific exception types for better error handling and reporting.
The co-browsing coordinator raises none of these: its
operations are total and drop invalid input silently.
"""

from typing import Any, Dict, Optional


class ShopAssistException(Exception):
    """Base exception for ShopAssist errors."""

    error_label = "Internal server error"

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code for API responses
            details: Additional error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class CatalogUnavailableError(ShopAssistException):
    """Raised when the product catalog failed to load or is empty."""

    error_label = "Catalog unavailable"

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message="Product catalog is currently unavailable",
            status_code=500,
            details=details,
        )


class ProductNotFoundError(ShopAssistException):
    """Raised when requested products do not exist in the catalog."""

    error_label = "Product not found"

    def __init__(self, product_id: Any, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Product {product_id} not found",
            status_code=404,
            details=details or {"product_id": product_id},
        )


class InvalidRequestError(ShopAssistException):
    """Raised when a request is well-formed JSON but semantically invalid."""

    error_label = "Invalid request"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, status_code=400, details=details)


class ImageTooLargeError(ShopAssistException):
    """Raised when an uploaded image exceeds the configured size limit."""

    error_label = "Image too large"

    def __init__(self, size: int, limit: int):
        super().__init__(
            message=f"Image of {size} bytes exceeds the {limit} byte limit",
            status_code=413,
            details={"size": size, "limit": limit},
        )


class ImageProcessingError(ShopAssistException):
    """Raised when an uploaded image cannot be processed."""

    error_label = "Image processing failed"

    def __init__(self, filename: str, error: Exception):
        super().__init__(
            message="Failed to process image",
            status_code=500,
            details={
                "filename": filename,
                "error": str(error),
                "error_type": type(error).__name__,
            },
        )


class SessionNotFoundError(ShopAssistException):
    """Raised when a co-browsing session has no members (and so does not exist)."""

    error_label = "Session not found"

    def __init__(self, session_id: str):
        super().__init__(
            message=f"Session '{session_id}' not found",
            status_code=404,
            details={"session_id": session_id},
        )
