"""
WooCommerce Listing Filters
Filter models for listing endpoints and their rendering into query parameters.
"""

from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from .codec import format_datetime


# =============================================================================
# Enums
# =============================================================================

class Context(str, Enum):
    """Scope under which the request is made"""
    VIEW = "view"
    EDIT = "edit"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class OrderBy(str, Enum):
    DATE = "date"
    ID = "id"
    INCLUDE = "include"
    TITLE = "title"
    SLUG = "slug"


class OrderStatus(str, Enum):
    """WooCommerce order status"""
    ANY = "any"
    PENDING = "pending"
    PROCESSING = "processing"
    ON_HOLD = "on-hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
    FAILED = "failed"
    TRASH = "trash"


class ProductStatus(str, Enum):
    """WooCommerce product status"""
    ANY = "any"
    DRAFT = "draft"
    PENDING = "pending"
    PRIVATE = "private"
    PUBLISH = "publish"


class ProductType(str, Enum):
    SIMPLE = "simple"
    GROUPED = "grouped"
    EXTERNAL = "external"
    VARIABLE = "variable"


class TaxClass(str, Enum):
    STANDARD = "standard"
    REDUCED_RATE = "reduced-rate"
    ZERO_RATE = "zero-rate"


class StockStatus(str, Enum):
    IN_STOCK = "instock"
    OUT_OF_STOCK = "outofstock"
    ON_BACKORDER = "onbackorder"


# =============================================================================
# Query Rendering
# =============================================================================

def join_ids(ids: List[int]) -> str:
    """Render a list of ids as a comma-joined decimal list"""
    return ",".join(str(i) for i in ids)


def render_query_value(value: Any) -> str:
    """Render one filter value the way the API expects it in a query string"""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return format_datetime(value)
    if isinstance(value, (list, tuple, set)):
        return join_ids(value)
    return str(value)


class ListConfig(BaseModel):
    """
    Base for listing filters.

    Every field is optional; None means "not specified" and never reaches
    the query string. Unknown fields are rejected. On paginated listings
    `page` pins a single page; when left unset all pages are fetched.
    """

    model_config = ConfigDict(extra="forbid")

    # field name -> query key, where they differ
    QUERY_KEYS: ClassVar[Dict[str, str]] = {
        "order_by": "orderby",
        "decimal_positions": "dp",
    }

    def to_params(self) -> Dict[str, str]:
        """
        Render the set fields as query parameters.

        Returns:
            Mapping of query key to rendered value, excluding `page`
        """
        params = {}
        for name in type(self).model_fields:
            if name == "page":
                continue
            value = getattr(self, name)
            if value is None:
                continue
            params[self.QUERY_KEYS.get(name, name)] = render_query_value(value)
        return params


class ListOrdersConfig(ListConfig):
    """Filters for GET orders"""
    page: Optional[int] = None
    context: Optional[Context] = None
    per_page: Optional[int] = None
    search: Optional[str] = None
    after: Optional[datetime] = None
    before: Optional[datetime] = None
    exclude: Optional[List[int]] = None
    include: Optional[List[int]] = None
    offset: Optional[int] = None
    order: Optional[SortOrder] = None
    order_by: Optional[OrderBy] = None
    parent: Optional[List[int]] = None
    parent_exclude: Optional[List[int]] = None
    status: Optional[OrderStatus] = None
    customer: Optional[int] = None
    product: Optional[int] = None
    decimal_positions: Optional[int] = None


class ListProductsConfig(ListConfig):
    """Filters for GET products"""
    page: Optional[int] = None
    context: Optional[Context] = None
    per_page: Optional[int] = None
    search: Optional[str] = None
    after: Optional[datetime] = None
    before: Optional[datetime] = None
    exclude: Optional[List[int]] = None
    include: Optional[List[int]] = None
    offset: Optional[int] = None
    order: Optional[SortOrder] = None
    order_by: Optional[OrderBy] = None
    parent: Optional[List[int]] = None
    parent_exclude: Optional[List[int]] = None
    slug: Optional[str] = None
    status: Optional[ProductStatus] = None
    type: Optional[ProductType] = None
    sku: Optional[str] = None
    featured: Optional[bool] = None
    category: Optional[str] = None
    tag: Optional[str] = None
    shipping_class: Optional[str] = None
    attribute: Optional[str] = None
    attribute_term: Optional[str] = None
    tax_class: Optional[TaxClass] = None
    on_sale: Optional[bool] = None
    min_price: Optional[int] = None
    max_price: Optional[int] = None
    stock_status: Optional[StockStatus] = None


class ListProductAttributeDefsConfig(ListConfig):
    """Filters for GET products/attributes (not paginated)"""
    context: Optional[Context] = None
