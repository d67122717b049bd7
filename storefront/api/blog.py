from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional
from storefront.db.storage import FileStorage, StorageError, get_storage
from storefront.models.schemas import BlogPost, BlogPostList

router = APIRouter()

@router.get("", response_model=BlogPostList)
def list_posts(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    search: Optional[str] = None,
    storage: FileStorage = Depends(get_storage),
):
    try:
        posts, total = storage.get_blog_posts(page, limit, search)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"posts": posts, "total": total}

@router.get("/{post_id}", response_model=BlogPost)
def get_post(post_id: str, storage: FileStorage = Depends(get_storage)):
    """Look a post up by id or by slug."""
    try:
        post = storage.get_blog_post(post_id)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not post:
        raise HTTPException(status_code=404, detail="Blog post not found")
    return post
