"""
Custom Exception Classes for the Meta Tags plugin

Errors raised while a tag pass runs. None of them reach the client: the
plugin registry logs them and the page response is left untouched.
"""

from typing import Any


class MetaTagsException(Exception):
    """Base exception class for all meta tags exceptions"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigurationError(MetaTagsException):
    """Raised when the plugin configuration cannot be validated"""

    def __init__(self, message: str = "Invalid meta tags configuration", errors: list[Any] | None = None):
        super().__init__(message=message, details={"errors": errors or []})


class TagDefinitionError(MetaTagsException):
    """Raised when a tag name has no entry in the tag-definition catalog"""

    def __init__(self, name: str):
        super().__init__(message=f"Unknown tag definition '{name}'", details={"name": name})


# ============================================================================
# Pass Exceptions
# ============================================================================


class CheckDateFormatError(MetaTagsException):
    """Raised when a URL's last-checked date cannot be parsed"""

    def __init__(self, value: Any):
        super().__init__(message=f"Invalid check date: {value!r}", details={"value": value})


class ContentReaderError(MetaTagsException):
    """Raised when a content reader fails to load page data"""

    def __init__(self, extension: str, message: str = "Content reader failed"):
        super().__init__(message=f"{message} ({extension})", details={"extension": extension})


class TagStoreError(MetaTagsException):
    """Raised when persisting tags fails"""

    def __init__(self, operation: str, url_id: int | None = None):
        super().__init__(
            message=f"Tag store {operation} failed",
            details={"operation": operation, "url_id": url_id},
        )
