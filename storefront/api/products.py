import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Optional
from storefront.api.deps import get_current_user
from storefront.db.storage import FileStorage, StorageError, get_storage
from storefront.models.schemas import Product, ProductIn, ProductList, User

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("", response_model=ProductList)
def list_products(
    category: Optional[str] = None,
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1),
    sort: Optional[str] = None,
    min_price: Optional[float] = Query(None, alias="minPrice"),
    max_price: Optional[float] = Query(None, alias="maxPrice"),
    brands: Optional[str] = Query(None, description="Comma separated brand names"),
    storage: FileStorage = Depends(get_storage),
):
    brand_list = [b.strip() for b in brands.split(",") if b.strip()] if brands else None
    try:
        products, total = storage.get_products(
            category=category,
            search=search,
            page=page,
            limit=limit,
            sort=sort,
            min_price=min_price,
            max_price=max_price,
            brands=brand_list,
        )
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"products": products, "total": total}

@router.get("/{product_id}", response_model=Product)
def get_product(product_id: str, storage: FileStorage = Depends(get_storage)):
    try:
        product = storage.get_product(product_id)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product

@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductIn,
    user: User = Depends(get_current_user),
    storage: FileStorage = Depends(get_storage),
):
    try:
        product = storage.create_product(payload)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    logger.info(f"Product {product.id} created by {user.id}")
    return product
