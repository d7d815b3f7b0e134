"""
WooCommerce Client Errors
Exception hierarchy raised by the WooCommerce REST API client.
"""

from typing import Any, Dict, List


class WooCommerceError(Exception):
    """Base exception for the WooCommerce client"""
    pass


class WooCommerceConfigError(WooCommerceError):
    """Required construction parameter missing"""
    pass


class WooCommerceValidationError(WooCommerceError):
    """Local precondition violated before any request was sent"""
    pass


class WooCommerceAPIError(WooCommerceError):
    """Transport failure or non-success response from the store"""
    def __init__(
        self,
        message: str,
        status_code: int = None,
        response_body: Any = None,
        code: str = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_body = response_body if response_body is not None else {}
        self.code = code


class WooCommerceAuthError(WooCommerceAPIError):
    """Authentication/authorization error"""
    pass


class WooCommerceNotFoundError(WooCommerceAPIError):
    """Resource not found"""
    pass


class WooCommerceDecodeError(WooCommerceAPIError):
    """Response body could not be decoded into the expected model"""
    def __init__(self, resource: str, message: str, fields: List[str] = None, status_code: int = None):
        self.resource = resource
        self.fields = fields or []
        detail = f"Failed to decode {resource}"
        if self.fields:
            detail += f" (fields: {', '.join(self.fields)})"
        super().__init__(f"{detail}: {message}", status_code=status_code)


class WooCommercePaginationError(WooCommerceError):
    """Total-pages header missing or not numeric"""
    def __init__(self, message: str, headers: Dict[str, str] = None):
        super().__init__(message)
        self.headers = headers or {}
