"""
Catalog-related exceptions (products, categories, uploads).
"""

from .base import StoreException


class CatalogException(StoreException):
    """Base exception for catalog errors."""
    pass


class ProductNotFoundException(CatalogException):
    """Raised when product is not found in database."""

    def __init__(self, product_id: str):
        super().__init__(
            f"Product {product_id} not found",
            details={'product_id': product_id}
        )
        self.product_id = product_id


class CategoryNotFoundException(CatalogException):
    """Raised when category is not found in database."""

    def __init__(self, category_id: str):
        super().__init__(
            f"Category {category_id} not found",
            details={'category_id': category_id}
        )
        self.category_id = category_id


class MediaUploadException(CatalogException):
    """Raised when an image cannot be written to object storage."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Upload to {path} failed: {reason}",
            details={'path': path, 'reason': reason}
        )
        self.path = path
        self.reason = reason


class InvalidImageException(CatalogException):
    """Raised when an uploaded file is not an acceptable image (type, size or name)."""

    def __init__(self, filename: str, reason: str):
        super().__init__(
            f"Rejected image '{filename}': {reason}",
            details={'filename': filename, 'reason': reason}
        )
        self.filename = filename
        self.reason = reason


class InvalidFormDataException(CatalogException):
    """Raised when an admin form payload is not valid JSON or misses required fields."""

    def __init__(self, form: str, reason: str):
        super().__init__(
            f"Invalid {form} payload: {reason}",
            details={'form': form, 'reason': reason}
        )
        self.form = form
        self.reason = reason
