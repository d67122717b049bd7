"""Typed wrappers around the storefront HTTP API.

Reads are cached in a QueryCache; every mutation drops the cached queries it
makes stale so the next read refetches. Signing in seeds the cached "me"
entry and signing out wipes the whole cache.
"""
import logging
from typing import Any, Dict, List, Optional, Union

import httpx
from pydantic import BaseModel, TypeAdapter

from storefront.client.cache import QueryCache, make_key
from storefront.models.schemas import (
    BlogPost, BlogPostList, CartLine, CheckoutRequest, Order, Product, ProductIn,
    ProductList, ProductUpdate, UserCreate, UserOut, UserUpdate,
)

logger = logging.getLogger(__name__)

ME = "/api/auth/me"
PRODUCTS = "/api/products"
CART = "/api/cart"
ORDERS = "/api/orders"
BLOG = "/api/blog"


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _body(payload: Union[BaseModel, Dict[str, Any], None], exclude_unset: bool = False) -> Optional[dict]:
    if payload is None or isinstance(payload, dict):
        return payload
    return payload.model_dump(mode="json", by_alias=True, exclude_none=True, exclude_unset=exclude_unset)


class StorefrontClient:
    def __init__(self, http: httpx.Client, cache: Optional[QueryCache] = None):
        self.http = http
        self.cache = cache if cache is not None else QueryCache()

    # --- plumbing ---
    def _request(self, method: str, path: str, json: Optional[dict] = None, params: Optional[dict] = None) -> Any:
        resp = self.http.request(method, path, json=json, params=params)
        if resp.is_error:
            try:
                data = resp.json()
                message = data.get("detail", resp.text) if isinstance(data, dict) else data
            except ValueError:
                message = resp.text or resp.reason_phrase
            raise ApiError(resp.status_code, str(message))
        if not resp.content:
            return None
        return resp.json()

    def _query(self, path: str, params: Optional[dict] = None) -> Any:
        params = {k: v for k, v in (params or {}).items() if v is not None}
        key = make_key(path, params)
        hit, value = self.cache.get(key)
        if hit:
            return value
        value = self._request("GET", path, params=params or None)
        self.cache.set(key, value)
        return value

    # --- auth ---
    def register(self, payload: Union[UserCreate, dict]) -> UserOut:
        data = self._request("POST", "/api/auth/register", json=_body(payload))
        return self._signed_in(data)

    def login(self, email: str, password: str) -> UserOut:
        data = self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        return self._signed_in(data)

    def _signed_in(self, data: dict) -> UserOut:
        self.cache.clear()
        self.cache.set(make_key(ME), data)
        return UserOut.model_validate(data["user"])

    def logout(self) -> None:
        self._request("POST", "/api/auth/logout")
        self.cache.clear()

    def current_user(self) -> Optional[UserOut]:
        """The signed-in user, or None when the session is missing or expired."""
        key = make_key(ME)
        hit, data = self.cache.get(key)
        if not hit:
            try:
                data = self._request("GET", ME)
            except ApiError as e:
                if e.status_code not in (401, 404):
                    raise
                data = None
            self.cache.set(key, data)
        return UserOut.model_validate(data["user"]) if data else None

    @property
    def is_authenticated(self) -> bool:
        return self.current_user() is not None

    def update_profile(self, payload: Union[UserUpdate, dict]) -> UserOut:
        data = self._request("PATCH", ME, json=_body(payload, exclude_unset=True))
        self.cache.set(make_key(ME), data)
        return UserOut.model_validate(data["user"])

    # --- products ---
    def list_products(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 12,
        sort: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        brands: Optional[List[str]] = None,
    ) -> ProductList:
        params = {
            "category": category,
            "search": search,
            "page": page,
            "limit": limit,
            "sort": sort,
            "minPrice": min_price,
            "maxPrice": max_price,
            "brands": ",".join(brands) if brands else None,
        }
        return ProductList.model_validate(self._query(PRODUCTS, params))

    def get_product(self, product_id: str) -> Product:
        return Product.model_validate(self._query(f"{PRODUCTS}/{product_id}"))

    def create_product(self, payload: Union[ProductIn, dict]) -> Product:
        data = self._request("POST", "/api/admin/products", json=_body(payload))
        self._catalog_changed()
        return Product.model_validate(data)

    def update_product(self, product_id: str, payload: Union[ProductUpdate, dict]) -> Product:
        data = self._request("PUT", f"/api/admin/products/{product_id}", json=_body(payload, exclude_unset=True))
        self._catalog_changed()
        return Product.model_validate(data)

    def delete_product(self, product_id: str) -> None:
        self._request("DELETE", f"/api/admin/products/{product_id}")
        self._catalog_changed()

    def _catalog_changed(self) -> None:
        # cart lines embed product data
        self.cache.invalidate(PRODUCTS)
        self.cache.invalidate(CART)

    # --- cart ---
    def get_cart(self) -> List[CartLine]:
        return TypeAdapter(List[CartLine]).validate_python(self._query(CART))

    def add_to_cart(self, product_id: str, quantity: int = 1) -> None:
        self._request("POST", CART, json={"productId": product_id, "quantity": quantity})
        self.cache.invalidate(CART)

    def update_quantity(self, product_id: str, quantity: int) -> None:
        self._request("PUT", f"{CART}/{product_id}", json={"quantity": quantity})
        self.cache.invalidate(CART)

    def remove_from_cart(self, product_id: str) -> None:
        self._request("DELETE", f"{CART}/{product_id}")
        self.cache.invalidate(CART)

    def clear_cart(self) -> None:
        self._request("DELETE", CART)
        self.cache.invalidate(CART)

    # --- checkout & orders ---
    def checkout(self, payload: Union[CheckoutRequest, dict]) -> Order:
        data = self._request("POST", "/api/checkout", json=_body(payload))
        self.cache.invalidate(CART)
        self.cache.invalidate(ORDERS)
        order = Order.model_validate(data)
        logger.info(f"Placed order {order.id}")
        return order

    def list_orders(self) -> List[Order]:
        return TypeAdapter(List[Order]).validate_python(self._query(ORDERS))

    def get_order(self, order_id: str) -> Order:
        return Order.model_validate(self._query(f"{ORDERS}/{order_id}"))

    # --- blog ---
    def list_posts(self, page: int = 1, limit: int = 10, search: Optional[str] = None) -> BlogPostList:
        return BlogPostList.model_validate(self._query(BLOG, {"page": page, "limit": limit, "search": search}))

    def get_post(self, post_id: str) -> BlogPost:
        return BlogPost.model_validate(self._query(f"{BLOG}/{post_id}"))
