from fastapi import APIRouter, Depends, HTTPException, status
from typing import List
from storefront.api.deps import require_user_id
from storefront.db.storage import FileStorage, StorageError, get_storage
from storefront.models.schemas import CheckoutRequest, Order
from storefront.services.orders_service import EmptyCartError, checkout_cart

router = APIRouter()

@router.post("/checkout", response_model=Order, status_code=status.HTTP_201_CREATED)
def checkout(
    payload: CheckoutRequest,
    user_id: str = Depends(require_user_id),
    storage: FileStorage = Depends(get_storage),
):
    try:
        return checkout_cart(storage, user_id, payload)
    except EmptyCartError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.get("/orders", response_model=List[Order])
def my_orders(user_id: str = Depends(require_user_id), storage: FileStorage = Depends(get_storage)):
    try:
        return storage.get_orders_by_user_id(user_id)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.get("/orders/{order_id}", response_model=Order)
def get_order(order_id: str, user_id: str = Depends(require_user_id), storage: FileStorage = Depends(get_storage)):
    try:
        order = storage.get_order(order_id)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    # someone else's order looks exactly like a missing one
    if not order or order.user_id != user_id:
        raise HTTPException(status_code=404, detail="Order not found")
    return order
