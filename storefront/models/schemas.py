from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List, Literal
from datetime import datetime


class CamelModel(BaseModel):
    # camelCase on the wire and on disk, snake_case in Python
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Address(CamelModel):
    street: str
    city: str
    state: str
    zip_code: str
    country: str


# Users
class UserCreate(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: str
    last_name: str
    address: Optional[Address] = None

class UserLogin(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=6)

class UserUpdate(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address: Optional[Address] = None
    password: Optional[str] = Field(None, min_length=6)

class UserOut(CamelModel):
    id: str
    email: EmailStr
    first_name: str
    last_name: str
    address: Optional[Address] = None
    created_at: datetime
    updated_at: datetime

class User(UserOut):
    password: str

    def public(self) -> UserOut:
        return UserOut.model_validate(self.model_dump(exclude={"password"}))

class AuthResponse(CamelModel):
    user: UserOut


# Products
class ProductIn(CamelModel):
    name: str
    description: str
    price: float = Field(..., ge=0)
    category: str
    images: List[str] = []
    stock: int = Field(..., ge=0)
    featured: bool = False
    tags: List[str] = []
    brand: Optional[str] = None

class ProductUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    category: Optional[str] = None
    images: Optional[List[str]] = None
    stock: Optional[int] = Field(None, ge=0)
    featured: Optional[bool] = None
    tags: Optional[List[str]] = None
    brand: Optional[str] = None

class Product(ProductIn):
    id: str
    created_at: datetime
    updated_at: datetime

class ProductList(CamelModel):
    products: List[Product]
    total: int


# Cart
class CartItem(CamelModel):
    product_id: str
    quantity: int = Field(1, ge=1)

class CartQuantity(CamelModel):
    quantity: int

class CartLine(CartItem):
    product: Optional[Product] = None


# Orders
OrderStatus = Literal["pending", "confirmed", "shipped", "delivered", "cancelled"]

class OrderItem(CamelModel):
    product_id: str
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0)

class PaymentDetails(CamelModel):
    card_number: str = Field(..., min_length=16)
    expiry_date: str = Field(..., min_length=5)
    cvv: str = Field(..., min_length=3)
    cardholder_name: str = Field(..., min_length=1)

class CheckoutRequest(CamelModel):
    shipping_address: Address
    payment_method: Optional[PaymentDetails] = None
    items: Optional[List[OrderItem]] = None
    total: Optional[float] = Field(None, ge=0)

class OrderCreate(CamelModel):
    user_id: str
    items: List[OrderItem]
    total: float = Field(..., ge=0)
    status: OrderStatus = "pending"
    shipping_address: Address

class OrderUpdate(CamelModel):
    status: Optional[OrderStatus] = None
    shipping_address: Optional[Address] = None

class Order(OrderCreate):
    id: str
    created_at: datetime
    updated_at: datetime


# Blog
class BlogPostIn(CamelModel):
    title: str
    content: str
    excerpt: str
    category: str
    image: str
    read_time: int = Field(..., ge=0)

class BlogPost(BlogPostIn):
    id: str
    slug: str
    created_at: datetime
    updated_at: datetime

class BlogPostList(CamelModel):
    posts: List[BlogPost]
    total: int


class Message(BaseModel):
    message: str
