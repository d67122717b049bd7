import logging
from fastapi import APIRouter, Depends, HTTPException, status
from storefront.api.deps import get_current_user
from storefront.api.products import create_product
from storefront.db.storage import FileStorage, StorageError, get_storage
from storefront.models.schemas import Message, Product, ProductUpdate, User

logger = logging.getLogger(__name__)

# Any signed-in user may manage the catalog; there are no roles.
router = APIRouter(dependencies=[Depends(get_current_user)])

router.post("/products", response_model=Product, status_code=status.HTTP_201_CREATED)(create_product)

@router.get("/products/{product_id}", response_model=Product)
def get_product(product_id: str, storage: FileStorage = Depends(get_storage)):
    try:
        product = storage.get_product(product_id)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product

@router.put("/products/{product_id}", response_model=Product)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    user: User = Depends(get_current_user),
    storage: FileStorage = Depends(get_storage),
):
    try:
        product = storage.update_product(product_id, payload)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    logger.info(f"Product {product_id} updated by {user.id}")
    return product

@router.delete("/products/{product_id}", response_model=Message)
def delete_product(
    product_id: str,
    user: User = Depends(get_current_user),
    storage: FileStorage = Depends(get_storage),
):
    try:
        deleted = storage.delete_product(product_id)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="Product not found")
    logger.info(f"Product {product_id} deleted by {user.id}")
    return {"message": "Product deleted successfully"}
