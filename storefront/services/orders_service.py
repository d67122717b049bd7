import logging
from storefront.db.storage import FileStorage
from storefront.models.schemas import CheckoutRequest, Order, OrderCreate, OrderItem

logger = logging.getLogger(__name__)


class EmptyCartError(Exception):
    pass


def checkout_cart(storage: FileStorage, user_id: str, payload: CheckoutRequest) -> Order:
    """Turn the user's current cart into a pending order and empty the cart.

    Line prices come from the submitted items when the client sent them and
    from the catalog otherwise. Neither prices nor stock are checked against
    the catalog, and the payment details are never charged.
    """
    cart = storage.get_cart(user_id)
    if not cart:
        raise EmptyCartError("Cart is empty")

    submitted = {i.product_id: i.price for i in payload.items or []}
    order_items = []
    for line in cart:
        price = submitted.get(line.product_id)
        if price is None:
            product = storage.get_product(line.product_id)
            price = product.price if product else 0.0
        order_items.append(OrderItem(product_id=line.product_id, quantity=line.quantity, price=price))

    total = payload.total
    if total is None:
        total = sum(i.price * i.quantity for i in order_items)

    order = storage.create_order(OrderCreate(
        user_id=user_id,
        items=order_items,
        total=total,
        status="pending",
        shipping_address=payload.shipping_address,
    ))
    storage.clear_cart(user_id)
    logger.info(f"Order {order.id} placed by {user_id} ({len(order_items)} items, total {total})")
    return order
