"""JSON-file persistence for the storefront.

Every entity type lives in its own JSON array file under the data directory
and every operation reloads the whole collection. Carts are kept in process
memory only. Read-modify-write cycles are not serialized: two concurrent
writers to the same file can lose an update.
"""
import json
import logging
import os
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError
from slugify import slugify

from storefront.core.config import DATA_DIR
from storefront.core.security import hash_password
from storefront.models.schemas import (
    BlogPost, BlogPostIn, CartItem, Order, OrderCreate, OrderUpdate,
    Product, ProductIn, ProductUpdate, User, UserCreate, UserUpdate,
)

logger = logging.getLogger(__name__)

USERS_FILE = "users.json"
PRODUCTS_FILE = "products.json"
ORDERS_FILE = "orders.json"
BLOG_FILE = "blog.json"

M = TypeVar("M", bound=BaseModel)


class StorageError(Exception):
    """Raised when a collection file cannot be read or written."""


def _now() -> datetime:
    return datetime.now(timezone.utc)

def _new_id() -> str:
    return str(uuid.uuid4())

def _paginate(items: list, page: Optional[int], limit: Optional[int]) -> list:
    if page and limit:
        start = (page - 1) * limit
        return items[start:start + limit]
    return items


class FileStorage:
    def __init__(self, data_dir: str = DATA_DIR):
        self.data_dir = data_dir
        self._carts: Dict[str, List[CartItem]] = {}
        os.makedirs(self.data_dir, exist_ok=True)

    # --- file helpers ---
    def _path(self, filename: str) -> str:
        return os.path.join(self.data_dir, filename)

    def _load(self, filename: str, model: Type[M]) -> List[M]:
        path = self._path(filename)
        if not os.path.exists(path):
            return []
        try:
            with open(path, "r", encoding="utf-8") as fh:
                records = json.load(fh)
            return [model.model_validate(r) for r in records]
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Failed to read {path}: {e}")
            raise StorageError(f"Could not read {filename}: {e}") from e

    def _save(self, filename: str, items: List[BaseModel]) -> None:
        path = self._path(filename)
        records = [i.model_dump(mode="json", by_alias=True) for i in items]
        try:
            with open(path, "w", encoding="utf-8") as fh:
                json.dump(records, fh, indent=2)
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            raise StorageError(f"Could not write {filename}: {e}") from e

    # --- users ---
    def get_user(self, user_id: str) -> Optional[User]:
        return next((u for u in self._load(USERS_FILE, User) if u.id == user_id), None)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._load(USERS_FILE, User) if u.email == email), None)

    def create_user(self, payload: UserCreate) -> User:
        users = self._load(USERS_FILE, User)
        now = _now()
        data = payload.model_dump()
        data["password"] = hash_password(payload.password)
        user = User(id=_new_id(), created_at=now, updated_at=now, **data)
        users.append(user)
        self._save(USERS_FILE, users)
        return user

    def update_user(self, user_id: str, payload: UserUpdate) -> Optional[User]:
        users = self._load(USERS_FILE, User)
        for index, user in enumerate(users):
            if user.id != user_id:
                continue
            changes = payload.model_dump(exclude_unset=True, exclude_none=True)
            if changes.get("password"):
                changes["password"] = hash_password(changes["password"])
            users[index] = User.model_validate({**user.model_dump(), **changes, "updated_at": _now()})
            self._save(USERS_FILE, users)
            return users[index]
        return None

    # --- products ---
    def get_products(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        sort: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        brands: Optional[List[str]] = None,
    ) -> Tuple[List[Product], int]:
        products = self._load(PRODUCTS_FILE, Product)

        if category:
            wanted = category.lower()
            products = [p for p in products if p.category.lower() == wanted]

        if search:
            term = search.lower()
            products = [
                p for p in products
                if term in p.name.lower()
                or term in p.description.lower()
                or any(term in tag.lower() for tag in p.tags)
            ]

        if min_price is not None:
            products = [p for p in products if p.price >= min_price]
        if max_price is not None:
            products = [p for p in products if p.price <= max_price]

        if brands:
            wanted_brands = {b.lower() for b in brands}
            products = [p for p in products if p.brand and p.brand.lower() in wanted_brands]

        if sort == "price-low":
            products.sort(key=lambda p: p.price)
        elif sort == "price-high":
            products.sort(key=lambda p: p.price, reverse=True)
        elif sort:
            products.sort(key=lambda p: p.name.lower())

        total = len(products)
        return _paginate(products, page, limit), total

    def get_product(self, product_id: str) -> Optional[Product]:
        return next((p for p in self._load(PRODUCTS_FILE, Product) if p.id == product_id), None)

    def create_product(self, payload: ProductIn) -> Product:
        products = self._load(PRODUCTS_FILE, Product)
        now = _now()
        product = Product(id=_new_id(), created_at=now, updated_at=now, **payload.model_dump())
        products.append(product)
        self._save(PRODUCTS_FILE, products)
        return product

    def update_product(self, product_id: str, payload: ProductUpdate) -> Optional[Product]:
        products = self._load(PRODUCTS_FILE, Product)
        for index, product in enumerate(products):
            if product.id == product_id:
                changes = payload.model_dump(exclude_unset=True, exclude_none=True)
                products[index] = Product.model_validate({**product.model_dump(), **changes, "updated_at": _now()})
                self._save(PRODUCTS_FILE, products)
                return products[index]
        return None

    def delete_product(self, product_id: str) -> bool:
        products = self._load(PRODUCTS_FILE, Product)
        remaining = [p for p in products if p.id != product_id]
        if len(remaining) == len(products):
            return False
        self._save(PRODUCTS_FILE, remaining)
        return True

    # --- orders ---
    def get_orders_by_user_id(self, user_id: str) -> List[Order]:
        return [o for o in self._load(ORDERS_FILE, Order) if o.user_id == user_id]

    def get_order(self, order_id: str) -> Optional[Order]:
        return next((o for o in self._load(ORDERS_FILE, Order) if o.id == order_id), None)

    def create_order(self, payload: OrderCreate) -> Order:
        orders = self._load(ORDERS_FILE, Order)
        now = _now()
        order = Order(id=_new_id(), created_at=now, updated_at=now, **payload.model_dump())
        orders.append(order)
        self._save(ORDERS_FILE, orders)
        return order

    def update_order(self, order_id: str, payload: OrderUpdate) -> Optional[Order]:
        orders = self._load(ORDERS_FILE, Order)
        for index, order in enumerate(orders):
            if order.id == order_id:
                changes = payload.model_dump(exclude_unset=True, exclude_none=True)
                orders[index] = Order.model_validate({**order.model_dump(), **changes, "updated_at": _now()})
                self._save(ORDERS_FILE, orders)
                return orders[index]
        return None

    # --- cart (memory only) ---
    def get_cart(self, user_id: str) -> List[CartItem]:
        return [item.model_copy() for item in self._carts.get(user_id, [])]

    def add_to_cart(self, user_id: str, item: CartItem) -> None:
        cart = self._carts.setdefault(user_id, [])
        for line in cart:
            if line.product_id == item.product_id:
                line.quantity += item.quantity
                return
        cart.append(item.model_copy())

    def update_cart_item(self, user_id: str, product_id: str, quantity: int) -> None:
        cart = self._carts.get(user_id, [])
        for index, line in enumerate(cart):
            if line.product_id == product_id:
                if quantity <= 0:
                    del cart[index]
                else:
                    line.quantity = quantity
                return

    def remove_from_cart(self, user_id: str, product_id: str) -> None:
        if user_id in self._carts:
            self._carts[user_id] = [i for i in self._carts[user_id] if i.product_id != product_id]

    def clear_cart(self, user_id: str) -> None:
        self._carts.pop(user_id, None)

    # --- blog ---
    def get_blog_posts(
        self, page: Optional[int] = None, limit: Optional[int] = None, search: Optional[str] = None
    ) -> Tuple[List[BlogPost], int]:
        posts = self._load(BLOG_FILE, BlogPost)
        if search:
            term = search.lower()
            posts = [
                p for p in posts
                if term in p.title.lower() or term in p.content.lower() or term in p.excerpt.lower()
            ]
        total = len(posts)
        return _paginate(posts, page, limit), total

    def get_blog_post(self, post_id: str) -> Optional[BlogPost]:
        return next((p for p in self._load(BLOG_FILE, BlogPost) if post_id in (p.id, p.slug)), None)

    def create_blog_post(self, payload: BlogPostIn) -> BlogPost:
        posts = self._load(BLOG_FILE, BlogPost)
        taken = {p.slug for p in posts}
        base_slug = slugify(payload.title)
        slug = base_slug
        counter = 1
        while slug in taken:
            slug = f"{base_slug}-{counter}"
            counter += 1
        now = _now()
        post = BlogPost(id=_new_id(), slug=slug, created_at=now, updated_at=now, **payload.model_dump())
        posts.append(post)
        self._save(BLOG_FILE, posts)
        return post


storage = None
def get_storage() -> FileStorage:
    global storage
    if storage is None:
        storage = FileStorage(DATA_DIR)
    return storage
