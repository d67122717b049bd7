from fastapi import APIRouter, Depends, HTTPException
from typing import List
from storefront.api.deps import require_user_id
from storefront.db.storage import FileStorage, StorageError, get_storage
from storefront.models.schemas import CartItem, CartLine, CartQuantity, Message

router = APIRouter()

@router.get("", response_model=List[CartLine])
def get_cart(user_id: str = Depends(require_user_id), storage: FileStorage = Depends(get_storage)):
    try:
        # a product deleted since it was added comes back as null
        return [
            CartLine(product_id=item.product_id, quantity=item.quantity, product=storage.get_product(item.product_id))
            for item in storage.get_cart(user_id)
        ]
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.post("", response_model=Message)
def add_to_cart(item: CartItem, user_id: str = Depends(require_user_id), storage: FileStorage = Depends(get_storage)):
    storage.add_to_cart(user_id, item)
    return {"message": "Item added to cart"}

@router.put("/{product_id}", response_model=Message)
def update_cart_item(
    product_id: str,
    payload: CartQuantity,
    user_id: str = Depends(require_user_id),
    storage: FileStorage = Depends(get_storage),
):
    storage.update_cart_item(user_id, product_id, payload.quantity)
    return {"message": "Cart updated"}

@router.delete("/{product_id}", response_model=Message)
def remove_from_cart(product_id: str, user_id: str = Depends(require_user_id), storage: FileStorage = Depends(get_storage)):
    storage.remove_from_cart(user_id, product_id)
    return {"message": "Item removed from cart"}

@router.delete("", response_model=Message)
def clear_cart(user_id: str = Depends(require_user_id), storage: FileStorage = Depends(get_storage)):
    storage.clear_cart(user_id)
    return {"message": "Cart cleared"}
