"""
WooCommerce REST API Client
Typed client for the WooCommerce REST API with page aggregation.

API Path: wp-json/wc/v2
Auth: HTTP Basic (consumer key / consumer secret)

Calls are synchronous and never retried; throttling is left to the store
and surfaces as a regular API error.
"""

import base64
import logging
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from .codec import WIRE_CONTEXT
from .config import DEFAULT_API_PATH, DEFAULT_TIMEOUT, WooCommerceConfig
from .errors import (
    WooCommerceAPIError,
    WooCommerceAuthError,
    WooCommerceConfigError,
    WooCommerceDecodeError,
    WooCommerceNotFoundError,
    WooCommercePaginationError,
    WooCommerceValidationError,
)
from .filters import (
    ListConfig,
    ListOrdersConfig,
    ListProductAttributeDefsConfig,
    ListProductsConfig,
    render_query_value,
)
from .models import (
    BatchResponse,
    ErrorResponse,
    Order,
    Product,
    ProductAttributeDef,
    ProductBrand,
    ProductVariation,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


@lru_cache(maxsize=None)
def _adapter(model_type: Any) -> TypeAdapter:
    return TypeAdapter(model_type)


class WooCommerceClient:
    """
    WooCommerce REST API client.

    One instance holds one set of credentials; create several for several
    stores. Not safe for concurrent use from multiple threads.

    Usage:
        with WooCommerceClient(
            host="https://shop.example.com",
            consumer_key="ck_xxxxx",
            consumer_secret="cs_xxxxx",
        ) as client:
            orders = client.list_orders(ListOrdersConfig(status=OrderStatus.PROCESSING))
            client.delete_product(55, force=True)
    """

    API_NAME = "WooCommerce"
    TOTAL_PAGES_HEADER = "X-WP-TotalPages"

    # Local cap on batch endpoints
    MAX_BATCH_SIZE = 100

    # Page size for listings that stop at the first empty page
    EMPTY_PAGE_PER_PAGE = 100

    def __init__(
        self,
        host: str,
        consumer_key: str,
        consumer_secret: str,
        api_path: str = None,
        timeout: float = None,
        transport: httpx.BaseTransport = None,
    ):
        """
        Initialize WooCommerce REST API client.

        Args:
            host: Store URL (e.g., "https://shop.example.com")
            consumer_key: REST API consumer key
            consumer_secret: REST API consumer secret
            api_path: API path below the host (default: wp-json/wc/v2)
            timeout: Request timeout in seconds
            transport: Custom httpx transport (used by tests)

        Raises:
            WooCommerceConfigError: When host, key or secret is missing
        """
        if not host:
            raise WooCommerceConfigError("Host not provided")
        if not consumer_key:
            raise WooCommerceConfigError("ConsumerKey not provided")
        if not consumer_secret:
            raise WooCommerceConfigError("ConsumerSecret not provided")

        self.host = host.rstrip("/")
        self.api_path = (api_path or DEFAULT_API_PATH).strip("/")
        self.timeout = timeout or DEFAULT_TIMEOUT
        self.base_url = f"{self.host}/{self.api_path}"

        self._token = base64.b64encode(f"{consumer_key}:{consumer_secret}".encode("utf-8")).decode("ascii")
        self._request_count = 0

        # HTTP client (lazy initialization)
        self._transport = transport
        self._client: Optional[httpx.Client] = None

        logger.info(f"Initialized WooCommerceClient for {self.host} ({self.api_path})")

    @classmethod
    def from_config(cls, config: WooCommerceConfig, transport: httpx.BaseTransport = None) -> "WooCommerceClient":
        """Create a client from a WooCommerceConfig"""
        if config is None:
            raise WooCommerceConfigError("WooCommerceConfig must not be None")
        return cls(
            host=config.host,
            consumer_key=config.consumer_key,
            consumer_secret=config.consumer_secret,
            api_path=config.api_path,
            timeout=config.timeout,
            transport=transport,
        )

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
                headers={
                    "Authorization": f"Basic {self._token}",
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
            )
        return self._client

    def close(self):
        """Close HTTP client"""
        if self._client and not self._client.is_closed:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # =========================================================================
    # Observability
    # =========================================================================

    @property
    def api_name(self) -> str:
        return self.API_NAME

    @property
    def api_key(self) -> str:
        """Encoded Basic-auth token"""
        return self._token

    @property
    def api_call_count(self) -> int:
        """Number of requests issued since construction or the last api_reset()"""
        return self._request_count

    def api_reset(self):
        self._request_count = 0

    # =========================================================================
    # HTTP Methods
    # =========================================================================

    def _request(
        self,
        method: str,
        endpoint: str,
        params: Dict[str, str] = None,
        json_data: Any = None,
    ) -> httpx.Response:
        """
        Make an authenticated HTTP request.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: Resource path below the API path (e.g., "products/55")
            params: Query parameters, sent sorted by key
            json_data: JSON body data

        Returns:
            The successful httpx.Response

        Raises:
            WooCommerceAPIError: On transport failures and non-2xx responses
            WooCommerceAuthError: On 401/403
            WooCommerceNotFoundError: On 404
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        client = self._get_client()

        self._request_count += 1

        try:
            response = client.request(
                method=method,
                url=url,
                params=sorted(params.items()) if params else None,
                json=json_data,
            )
        except httpx.TimeoutException as e:
            raise WooCommerceAPIError(f"Request timeout: {e}") from e
        except httpx.RequestError as e:
            raise WooCommerceAPIError(f"Request error: {e}") from e

        logger.debug(f"API call: {method} {endpoint} - {response.status_code}")

        if response.is_success:
            return response

        raise self._error_from_response(method, endpoint, response)

    def _error_from_response(self, method: str, endpoint: str, response: httpx.Response) -> WooCommerceAPIError:
        """Build a typed error, promoting the error envelope's message when present"""
        try:
            body = response.json()
        except ValueError:
            body = None

        envelope = ErrorResponse()
        if isinstance(body, dict):
            try:
                envelope = ErrorResponse.model_validate(body)
            except ValidationError:
                envelope = ErrorResponse(code=str(body.get("code") or ""), message=str(body.get("message") or ""))

        message = envelope.message or f"API error: {response.status_code} {response.reason_phrase}"
        logger.warning(f"{method} {endpoint} failed with {response.status_code}: {message}")

        if response.status_code in (401, 403):
            error_class = WooCommerceAuthError
        elif response.status_code == 404:
            error_class = WooCommerceNotFoundError
        else:
            error_class = WooCommerceAPIError

        return error_class(
            message,
            status_code=response.status_code,
            response_body=body if body is not None else response.text,
            code=envelope.code or None,
        )

    def _get(self, endpoint: str, params: Dict[str, str] = None) -> httpx.Response:
        """GET request"""
        return self._request("GET", endpoint, params=params)

    def _post(self, endpoint: str, data: Any) -> httpx.Response:
        """POST request"""
        return self._request("POST", endpoint, json_data=data)

    def _put(self, endpoint: str, data: Any) -> httpx.Response:
        """PUT request"""
        return self._request("PUT", endpoint, json_data=data)

    def _delete(self, endpoint: str, force: bool) -> httpx.Response:
        """DELETE request"""
        return self._request("DELETE", endpoint, params={"force": render_query_value(force)})

    # =========================================================================
    # Decoding
    # =========================================================================

    def _validate(self, data: Any, model_type: Any, resource: str, status_code: int = None) -> Any:
        try:
            return _adapter(model_type).validate_python(data, context={WIRE_CONTEXT: True})
        except ValidationError as e:
            errors = e.errors()
            fields = [".".join(str(part) for part in err["loc"]) for err in errors]
            message = "; ".join(err["msg"] for err in errors)
            raise WooCommerceDecodeError(resource, message, fields=fields, status_code=status_code) from e

    def _decode(self, response: httpx.Response, model_type: Any, resource: str) -> Any:
        """Decode a response body into `model_type` (a model or List[model])"""
        try:
            data = response.json()
        except ValueError as e:
            raise WooCommerceDecodeError(
                resource,
                f"response is not valid JSON ({e})",
                status_code=response.status_code,
            ) from e
        return self._validate(data, model_type, resource, status_code=response.status_code)

    @staticmethod
    def _body(record: BaseModel) -> Dict[str, Any]:
        return record.model_dump(mode="json", exclude_none=True)

    # =========================================================================
    # Pagination Helpers
    # =========================================================================

    def _total_pages(self, response: httpx.Response) -> int:
        """Read the total page count from the X-WP-TotalPages header"""
        value = response.headers.get(self.TOTAL_PAGES_HEADER)
        try:
            return int(value)
        except (TypeError, ValueError):
            raise WooCommercePaginationError(
                f"Error while retrieving {self.TOTAL_PAGES_HEADER} header (got {value!r})",
                headers=dict(response.headers),
            )

    def _paginate(
        self,
        endpoint: str,
        model_type: Type[ModelT],
        config: Optional[ListConfig],
        resource: str,
    ) -> List[ModelT]:
        """
        Fetch one pinned page, or every page of a listing endpoint.

        When `config.page` is set exactly one request is made. Otherwise
        pages are fetched from 1 until the count reported by the
        X-WP-TotalPages header is reached.

        Raises:
            WooCommercePaginationError: When the header is missing or not numeric
        """
        params = config.to_params() if config is not None else {}
        pinned_page = config.page if config is not None else None

        page = pinned_page if pinned_page is not None else 1
        max_page = page

        all_items: List[ModelT] = []

        while page <= max_page:
            params["page"] = str(page)

            response = self._get(endpoint, params=params)
            items = self._decode(response, List[model_type], resource)
            all_items.extend(items)

            if pinned_page is None:
                max_page = self._total_pages(response)

            logger.debug(f"Fetched {resource} page {page}/{max_page}: {len(items)} items (total: {len(all_items)})")
            page += 1

        return all_items

    def _paginate_until_empty(
        self,
        endpoint: str,
        model_type: Type[ModelT],
        resource: str,
    ) -> List[ModelT]:
        """Fetch successive pages until one comes back empty"""
        page = 1
        all_items: List[ModelT] = []

        while True:
            params = {"per_page": str(self.EMPTY_PAGE_PER_PAGE), "page": str(page)}

            response = self._get(endpoint, params=params)
            items = self._decode(response, List[model_type], resource)

            if not items:
                break

            all_items.extend(items)
            logger.debug(f"Fetched {resource} page {page}: {len(items)} items (total: {len(all_items)})")
            page += 1

        return all_items

    # =========================================================================
    # Generic CRUD Helpers
    # =========================================================================

    def _create(self, endpoint: str, record: Optional[ModelT], model_type: Type[ModelT], resource: str) -> ModelT:
        if record is None:
            raise WooCommerceValidationError(f"{resource} must not be None")

        response = self._post(endpoint, self._body(record))
        return self._decode(response, model_type, resource)

    def _update(self, endpoint: str, record: Optional[ModelT], model_type: Type[ModelT], resource: str) -> ModelT:
        if record is None:
            raise WooCommerceValidationError(f"{resource} must not be None")
        if record.id is None:
            raise WooCommerceValidationError(f"{resource} has no id")

        response = self._put(f"{endpoint}/{record.id}", self._body(record))
        return self._decode(response, model_type, resource)

    def _batch_update(
        self,
        endpoint: str,
        records: Iterable[ModelT],
        model_type: Type[ModelT],
        resource: str,
        label: str,
    ) -> List[ModelT]:
        """
        Update up to MAX_BATCH_SIZE records in a single request.

        Args:
            endpoint: Collection endpoint; "/batch" is appended
            records: Records to update, each with an id
            model_type: Model to decode the updated records into
            resource: Resource name used in error messages
            label: Plural label used in the batch size error

        Returns:
            Updated records as returned by the store

        Raises:
            WooCommerceAPIError: When the store rejects any record of the batch
        """
        if records is None:
            raise WooCommerceValidationError(f"{label.capitalize()} must not be None")

        records = list(records)
        if len(records) > self.MAX_BATCH_SIZE:
            raise WooCommerceValidationError(f"Maximum {self.MAX_BATCH_SIZE} {label} can be updated at once")

        for record in records:
            if record is None:
                raise WooCommerceValidationError(f"{resource} must not be None")
            if record.id is None:
                raise WooCommerceValidationError(f"{resource} has no id")

        response = self._post(f"{endpoint}/batch", {"update": [self._body(r) for r in records]})
        batch = self._decode(response, BatchResponse, f"{resource} batch")

        # Rejected items come back inside a 2xx response as {"id": N, "error": {...}}
        failed = [item for item in batch.update if item.get("error")]
        if failed:
            raise self._batch_error(failed, label, response.status_code)

        return self._validate(batch.update, List[model_type], resource, status_code=response.status_code)

    def _batch_error(self, failed: List[Dict[str, Any]], label: str, status_code: int) -> WooCommerceAPIError:
        """Collect the per-item error envelopes of a batch into one error"""
        envelopes = []
        for item in failed:
            error = item["error"]
            if isinstance(error, dict):
                envelopes.append((item.get("id"), str(error.get("code") or ""), str(error.get("message") or "")))
            else:
                envelopes.append((item.get("id"), "", str(error)))

        details = "; ".join(f"id {record_id}: {message or code}" for record_id, code, message in envelopes)
        message = f"Batch update failed for {len(failed)} {label}: {details}"
        logger.warning(message)

        return WooCommerceAPIError(
            message,
            status_code=status_code,
            response_body=failed,
            code=envelopes[0][1] or None,
        )

    # =========================================================================
    # Orders API
    # =========================================================================

    def list_orders(self, config: ListOrdersConfig = None) -> List[Order]:
        """
        Get orders matching the given filters.

        Args:
            config: Listing filters; leave `page` unset to fetch all pages

        Returns:
            List of Order models
        """
        return self._paginate("orders", Order, config, "Order")

    def get_order(self, order_id: int) -> Order:
        """Get a single order by ID"""
        response = self._get(f"orders/{order_id}")
        return self._decode(response, Order, "Order")

    def create_order(self, order: Order) -> Order:
        """Create a new order"""
        return self._create("orders", order, Order, "Order")

    def update_order(self, order: Order) -> Order:
        """Update an existing order; `order.id` selects the record"""
        return self._update("orders", order, Order, "Order")

    def delete_order(self, order_id: int, force: bool = False):
        """Delete an order; without `force` it is moved to the trash"""
        self._delete(f"orders/{order_id}", force)

    # =========================================================================
    # Products API
    # =========================================================================

    def list_products(self, config: ListProductsConfig = None) -> List[Product]:
        """
        Get products matching the given filters.

        Args:
            config: Listing filters; leave `page` unset to fetch all pages

        Returns:
            List of Product models
        """
        return self._paginate("products", Product, config, "Product")

    def get_product(self, product_id: int) -> Product:
        """Get a single product by ID"""
        response = self._get(f"products/{product_id}")
        return self._decode(response, Product, "Product")

    def create_product(self, product: Product) -> Product:
        """Create a new product"""
        return self._create("products", product, Product, "Product")

    def update_product(self, product: Product) -> Product:
        """Update an existing product; `product.id` selects the record"""
        return self._update("products", product, Product, "Product")

    def delete_product(self, product_id: int, force: bool = False):
        """Delete a product; without `force` it is moved to the trash"""
        self._delete(f"products/{product_id}", force)

    def batch_update_products(self, products: List[Product]) -> List[Product]:
        """
        Update several products in one request.

        Raises:
            WooCommerceValidationError: More than 100 products, or a product without id
        """
        return self._batch_update("products", products, Product, "Product", "products")

    # =========================================================================
    # Product Variations API
    # =========================================================================

    def list_product_variations(self, product_id: int) -> List[ProductVariation]:
        """Get all variations of a variable product"""
        return self._paginate_until_empty(f"products/{product_id}/variations", ProductVariation, "ProductVariation")

    def create_product_variation(self, product_id: int, variation: ProductVariation) -> ProductVariation:
        return self._create(f"products/{product_id}/variations", variation, ProductVariation, "ProductVariation")

    def update_product_variation(self, product_id: int, variation: ProductVariation) -> ProductVariation:
        return self._update(f"products/{product_id}/variations", variation, ProductVariation, "ProductVariation")

    def delete_product_variation(self, product_id: int, variation_id: int, force: bool = False):
        self._delete(f"products/{product_id}/variations/{variation_id}", force)

    def batch_update_product_variations(
        self,
        product_id: int,
        variations: List[ProductVariation],
    ) -> List[ProductVariation]:
        """Update up to 100 variations of one product in a single request"""
        return self._batch_update(
            f"products/{product_id}/variations",
            variations,
            ProductVariation,
            "ProductVariation",
            "product variations",
        )

    # =========================================================================
    # Product Attributes API
    # =========================================================================

    def list_product_attribute_defs(self, config: ListProductAttributeDefsConfig = None) -> List[ProductAttributeDef]:
        """Get all global attribute definitions (the endpoint is not paginated)"""
        params = config.to_params() if config is not None else None
        response = self._get("products/attributes", params=params)
        return self._decode(response, List[ProductAttributeDef], "ProductAttributeDef")

    def create_product_attribute_def(self, attribute: ProductAttributeDef) -> ProductAttributeDef:
        return self._create("products/attributes", attribute, ProductAttributeDef, "ProductAttributeDef")

    def update_product_attribute_def(self, attribute: ProductAttributeDef) -> ProductAttributeDef:
        return self._update("products/attributes", attribute, ProductAttributeDef, "ProductAttributeDef")

    def delete_product_attribute_def(self, attribute_id: int, force: bool = True):
        """Delete an attribute definition; the API requires `force` for attributes"""
        self._delete(f"products/attributes/{attribute_id}", force)

    # =========================================================================
    # Product Brands API
    # =========================================================================

    def list_product_brands(self) -> List[ProductBrand]:
        """Get all product brands"""
        return self._paginate_until_empty("products/brands", ProductBrand, "ProductBrand")

    def create_product_brand(self, brand: ProductBrand) -> ProductBrand:
        return self._create("products/brands", brand, ProductBrand, "ProductBrand")

    def update_product_brand(self, brand: ProductBrand) -> ProductBrand:
        return self._update("products/brands", brand, ProductBrand, "ProductBrand")

    def delete_product_brand(self, brand_id: int, force: bool = True):
        """Delete a brand; terms cannot be trashed, so `force` defaults to True"""
        self._delete(f"products/brands/{brand_id}", force)
