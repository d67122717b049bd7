from typing import Iterable
from pydantic import BaseModel
from storefront.models.schemas import CartLine

SHIPPING_FLAT = 9.99
TAX_RATE = 0.08


class CheckoutQuote(BaseModel):
    subtotal: float
    shipping: float
    tax: float
    total: float


def total_items(lines: Iterable[CartLine]) -> int:
    return sum(line.quantity for line in lines)

def total_price(lines: Iterable[CartLine]) -> float:
    # lines whose product was deleted count as free
    return sum((line.product.price if line.product else 0) * line.quantity for line in lines)

def checkout_quote(subtotal: float) -> CheckoutQuote:
    # nothing to ship for an empty cart
    shipping = SHIPPING_FLAT if subtotal > 0 else 0.0
    tax = subtotal * TAX_RATE
    return CheckoutQuote(subtotal=subtotal, shipping=shipping, tax=tax, total=subtotal + shipping + tax)
