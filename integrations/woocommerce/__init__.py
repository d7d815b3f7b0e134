"""
WooCommerce Integration Module
Typed WooCommerce REST API client: resource models, listing filters,
page aggregation and normalization of inconsistently encoded fields.
"""

from .client import WooCommerceClient
from .config import WooCommerceConfig
from .errors import (
    WooCommerceAPIError,
    WooCommerceAuthError,
    WooCommerceConfigError,
    WooCommerceDecodeError,
    WooCommerceError,
    WooCommerceNotFoundError,
    WooCommercePaginationError,
    WooCommerceValidationError,
)
from .filters import (
    Context,
    ListOrdersConfig,
    ListProductAttributeDefsConfig,
    ListProductsConfig,
    OrderBy,
    OrderStatus,
    ProductStatus,
    ProductType,
    SortOrder,
    StockStatus,
    TaxClass,
)
from .models import (
    ErrorResponse,
    MetaData,
    Order,
    OrderLineItem,
    Product,
    ProductAttributeDef,
    ProductBrand,
    ProductDimensions,
    ProductImage,
    ProductVariation,
)

__all__ = [
    # Client
    "WooCommerceClient",
    "WooCommerceConfig",
    # Errors
    "WooCommerceError",
    "WooCommerceConfigError",
    "WooCommerceValidationError",
    "WooCommerceAPIError",
    "WooCommerceAuthError",
    "WooCommerceNotFoundError",
    "WooCommerceDecodeError",
    "WooCommercePaginationError",
    # Filters
    "ListOrdersConfig",
    "ListProductsConfig",
    "ListProductAttributeDefsConfig",
    "Context",
    "SortOrder",
    "OrderBy",
    "OrderStatus",
    "ProductStatus",
    "ProductType",
    "TaxClass",
    "StockStatus",
    # Models
    "ErrorResponse",
    "MetaData",
    "Order",
    "OrderLineItem",
    "Product",
    "ProductAttributeDef",
    "ProductBrand",
    "ProductDimensions",
    "ProductImage",
    "ProductVariation",
]
