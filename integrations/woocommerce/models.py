"""
WooCommerce Integration Models
Pydantic models for WooCommerce REST API resources and the error envelope.

Every field is optional so a partially filled record can be sent as a
create or update body; bodies are serialized with exclude_none.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from .codec import DateTimeString, Float64String, Int64String, MetaValue


# =============================================================================
# Shared Models
# =============================================================================

class MetaData(BaseModel):
    """Meta-data entry attached to orders, products and their sub-objects"""
    id: Optional[int] = None
    key: Optional[str] = None
    value: MetaValue = ""


class ErrorData(BaseModel):
    status: Optional[int] = None
    params: Dict[str, str] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Error envelope returned by the API on failure"""
    code: str = ""
    message: str = ""
    data: ErrorData = Field(default_factory=ErrorData)


# =============================================================================
# Order Models
# =============================================================================

class OrderBilling(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company: Optional[str] = None
    address_1: Optional[str] = None
    address_2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postcode: Optional[str] = None
    country: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class OrderShipping(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company: Optional[str] = None
    address_1: Optional[str] = None
    address_2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postcode: Optional[str] = None
    country: Optional[str] = None


class OrderTax(BaseModel):
    """Tax applied to a single line"""
    id: Optional[int] = None
    rate_code: Optional[str] = None
    rate_id: Optional[str] = None
    label: Optional[str] = None
    compound: Optional[bool] = None
    total: Optional[Float64String] = None
    subtotal: Optional[Float64String] = None
    tax_total: Optional[Float64String] = None
    shipping_tax_total: Optional[Float64String] = None
    meta_data: Optional[List[MetaData]] = None


class OrderLineItem(BaseModel):
    id: Optional[int] = None
    name: Optional[str] = None
    product_id: Optional[int] = None
    variation_id: Optional[int] = None
    quantity: Optional[int] = None
    tax_class: Optional[str] = None
    subtotal: Optional[Float64String] = None
    subtotal_tax: Optional[Float64String] = None
    total: Optional[Float64String] = None
    total_tax: Optional[Float64String] = None
    taxes: Optional[List[OrderTax]] = None
    meta_data: Optional[List[MetaData]] = None
    sku: Optional[str] = None
    price: Optional[Float64String] = None


class OrderTaxLine(BaseModel):
    id: Optional[int] = None
    rate_code: Optional[str] = None
    rate_id: Optional[int] = None
    label: Optional[str] = None
    compound: Optional[bool] = None
    tax_total: Optional[Float64String] = None
    shipping_tax_total: Optional[Float64String] = None
    meta_data: Optional[List[MetaData]] = None


class OrderShippingLine(BaseModel):
    id: Optional[int] = None
    method_title: Optional[str] = None
    method_id: Optional[str] = None
    total: Optional[Float64String] = None
    total_tax: Optional[Float64String] = None
    taxes: Optional[List[OrderTax]] = None
    meta_data: Optional[List[MetaData]] = None


class OrderFeeLine(BaseModel):
    id: Optional[int] = None
    name: Optional[str] = None
    tax_class: Optional[str] = None
    tax_status: Optional[str] = None
    total: Optional[Float64String] = None
    total_tax: Optional[Float64String] = None
    taxes: Optional[List[OrderTax]] = None
    meta_data: Optional[List[MetaData]] = None


class OrderCouponLine(BaseModel):
    id: Optional[int] = None
    code: Optional[str] = None
    discount: Optional[Float64String] = None
    discount_tax: Optional[Float64String] = None
    meta_data: Optional[List[MetaData]] = None


class OrderRefund(BaseModel):
    id: Optional[int] = None
    reason: Optional[str] = None
    total: Optional[Float64String] = None


class Order(BaseModel):
    """WooCommerce order"""
    id: Optional[int] = None
    parent_id: Optional[int] = None
    number: Optional[str] = None
    order_key: Optional[str] = None
    created_via: Optional[str] = None
    version: Optional[str] = None
    status: Optional[str] = None
    currency: Optional[str] = None
    currency_symbol: Optional[str] = None
    date_created: Optional[DateTimeString] = None
    date_created_gmt: Optional[DateTimeString] = None
    date_modified: Optional[DateTimeString] = None
    date_modified_gmt: Optional[DateTimeString] = None
    discount_total: Optional[Float64String] = None
    discount_tax: Optional[Float64String] = None
    shipping_total: Optional[Float64String] = None
    shipping_tax: Optional[Float64String] = None
    cart_tax: Optional[Float64String] = None
    total: Optional[Float64String] = None
    total_tax: Optional[Float64String] = None
    prices_include_tax: Optional[bool] = None
    customer_id: Optional[int] = None
    customer_ip_address: Optional[str] = None
    customer_user_agent: Optional[str] = None
    customer_note: Optional[str] = None
    billing: Optional[OrderBilling] = None
    shipping: Optional[OrderShipping] = None
    payment_method: Optional[str] = None
    payment_method_title: Optional[str] = None
    transaction_id: Optional[str] = None
    date_paid: Optional[DateTimeString] = None
    date_paid_gmt: Optional[DateTimeString] = None
    date_completed: Optional[DateTimeString] = None
    date_completed_gmt: Optional[DateTimeString] = None
    cart_hash: Optional[str] = None
    meta_data: Optional[List[MetaData]] = None
    line_items: Optional[List[OrderLineItem]] = None
    tax_lines: Optional[List[OrderTaxLine]] = None
    shipping_lines: Optional[List[OrderShippingLine]] = None
    fee_lines: Optional[List[OrderFeeLine]] = None
    coupon_lines: Optional[List[OrderCouponLine]] = None
    refunds: Optional[List[OrderRefund]] = None
    set_paid: Optional[bool] = None


# =============================================================================
# Product Models
# =============================================================================

class ProductDimensions(BaseModel):
    length: Optional[Float64String] = None
    width: Optional[Float64String] = None
    height: Optional[Float64String] = None


class ProductCategory(BaseModel):
    id: Optional[int] = None
    name: Optional[str] = None
    slug: Optional[str] = None


class ProductTag(BaseModel):
    id: Optional[int] = None
    name: Optional[str] = None
    slug: Optional[str] = None


class ProductImage(BaseModel):
    id: Optional[int] = None
    date_created: Optional[DateTimeString] = None
    date_created_gmt: Optional[DateTimeString] = None
    date_modified: Optional[DateTimeString] = None
    date_modified_gmt: Optional[DateTimeString] = None
    src: Optional[str] = None
    name: Optional[str] = None
    alt: Optional[str] = None
    position: Optional[int] = None


class ProductDownload(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    file: Optional[str] = None


class ProductAttribute(BaseModel):
    """Attribute assigned to a product (not the global definition)"""
    id: Optional[int] = None
    name: Optional[str] = None
    position: Optional[int] = None
    visible: Optional[bool] = None
    variation: Optional[bool] = None
    options: Optional[List[str]] = None
    option: Optional[str] = None


class Product(BaseModel):
    """WooCommerce product"""
    id: Optional[int] = None
    name: Optional[str] = None
    slug: Optional[str] = None
    permalink: Optional[str] = None
    date_created: Optional[DateTimeString] = None
    date_created_gmt: Optional[DateTimeString] = None
    date_modified: Optional[DateTimeString] = None
    date_modified_gmt: Optional[DateTimeString] = None
    type: Optional[str] = None
    status: Optional[str] = None
    featured: Optional[bool] = None
    catalog_visibility: Optional[str] = None
    description: Optional[str] = None
    short_description: Optional[str] = None
    sku: Optional[str] = None
    price: Optional[Float64String] = None
    regular_price: Optional[Float64String] = None
    sale_price: Optional[Float64String] = None
    date_on_sale_from: Optional[DateTimeString] = None
    date_on_sale_from_gmt: Optional[DateTimeString] = None
    date_on_sale_to: Optional[DateTimeString] = None
    date_on_sale_to_gmt: Optional[DateTimeString] = None
    price_html: Optional[str] = None
    on_sale: Optional[bool] = None
    purchasable: Optional[bool] = None
    total_sales: Optional[Int64String] = None
    virtual: Optional[bool] = None
    downloadable: Optional[bool] = None
    downloads: Optional[List[ProductDownload]] = None
    download_limit: Optional[int] = None
    download_expiry: Optional[int] = None
    external_url: Optional[str] = None
    button_text: Optional[str] = None
    tax_status: Optional[str] = None
    tax_class: Optional[str] = None
    manage_stock: Optional[bool] = None
    stock_quantity: Optional[Int64String] = None
    stock_status: Optional[str] = None
    backorders: Optional[str] = None
    backorders_allowed: Optional[bool] = None
    backordered: Optional[bool] = None
    sold_individually: Optional[bool] = None
    weight: Optional[Float64String] = None
    dimensions: Optional[ProductDimensions] = None
    shipping_required: Optional[bool] = None
    shipping_taxable: Optional[bool] = None
    shipping_class: Optional[str] = None
    shipping_class_id: Optional[int] = None
    reviews_allowed: Optional[bool] = None
    average_rating: Optional[Float64String] = None
    rating_count: Optional[int] = None
    related_ids: Optional[List[int]] = None
    upsell_ids: Optional[List[int]] = None
    cross_sell_ids: Optional[List[int]] = None
    parent_id: Optional[int] = None
    purchase_note: Optional[str] = None
    categories: Optional[List[ProductCategory]] = None
    tags: Optional[List[ProductTag]] = None
    images: Optional[List[ProductImage]] = None
    attributes: Optional[List[ProductAttribute]] = None
    default_attributes: Optional[List[ProductAttribute]] = None
    variations: Optional[List[int]] = None
    grouped_products: Optional[List[int]] = None
    menu_order: Optional[int] = None
    meta_data: Optional[List[MetaData]] = None


class ProductVariationAttribute(BaseModel):
    id: Optional[int] = None
    name: Optional[str] = None
    slug: Optional[str] = None
    option: Optional[str] = None


class ProductVariation(BaseModel):
    """Variation of a variable product"""
    id: Optional[int] = None
    date_created: Optional[DateTimeString] = None
    date_created_gmt: Optional[DateTimeString] = None
    date_modified: Optional[DateTimeString] = None
    date_modified_gmt: Optional[DateTimeString] = None
    description: Optional[str] = None
    permalink: Optional[str] = None
    sku: Optional[str] = None
    price: Optional[Float64String] = None
    regular_price: Optional[Float64String] = None
    sale_price: Optional[Float64String] = None
    date_on_sale_from: Optional[DateTimeString] = None
    date_on_sale_from_gmt: Optional[DateTimeString] = None
    date_on_sale_to: Optional[DateTimeString] = None
    date_on_sale_to_gmt: Optional[DateTimeString] = None
    on_sale: Optional[bool] = None
    visible: Optional[bool] = None
    status: Optional[str] = None
    purchasable: Optional[bool] = None
    virtual: Optional[bool] = None
    downloadable: Optional[bool] = None
    downloads: Optional[List[ProductDownload]] = None
    download_limit: Optional[int] = None
    download_expiry: Optional[int] = None
    tax_status: Optional[str] = None
    tax_class: Optional[str] = None
    # bool, or "parent" when stock is managed on the parent product
    manage_stock: Optional[Union[bool, str]] = None
    stock_quantity: Optional[Int64String] = None
    stock_status: Optional[str] = None
    in_stock: Optional[bool] = None
    backorders: Optional[str] = None
    backorders_allowed: Optional[bool] = None
    backordered: Optional[bool] = None
    weight: Optional[Float64String] = None
    dimensions: Optional[ProductDimensions] = None
    shipping_class: Optional[str] = None
    shipping_class_id: Optional[int] = None
    image: Optional[ProductImage] = None
    attributes: Optional[List[ProductVariationAttribute]] = None
    menu_order: Optional[int] = None
    meta_data: Optional[List[MetaData]] = None


class ProductAttributeDef(BaseModel):
    """Global product attribute definition (products/attributes)"""
    id: Optional[int] = None
    name: Optional[str] = None
    slug: Optional[str] = None
    type: Optional[str] = None
    order_by: Optional[str] = None
    has_archives: Optional[bool] = None


class ProductBrandImage(BaseModel):
    id: Optional[int] = None
    date_created: Optional[DateTimeString] = None
    date_created_gmt: Optional[DateTimeString] = None
    date_modified: Optional[DateTimeString] = None
    date_modified_gmt: Optional[DateTimeString] = None
    src: Optional[str] = None
    name: Optional[str] = None
    alt: Optional[str] = None


class ProductBrand(BaseModel):
    """Product brand term (products/brands)"""
    id: Optional[int] = None
    name: Optional[str] = None
    slug: Optional[str] = None
    parent: Optional[int] = None
    description: Optional[str] = None
    image: Optional[ProductBrandImage] = None
    menu_order: Optional[int] = None
    count: Optional[int] = None


# =============================================================================
# Batch Models
# =============================================================================

class BatchResponse(BaseModel):
    """Response of a batch endpoint; each list holds the affected records"""
    create: List[Dict[str, Any]] = Field(default_factory=list)
    update: List[Dict[str, Any]] = Field(default_factory=list)
    delete: List[Dict[str, Any]] = Field(default_factory=list)
