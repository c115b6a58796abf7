import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.db.memory import MemoryStore
from app.deps import get_store
from app.models.category import Category, CategoryCreate, CategoryUpdate

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=List[Category])
def list_categories(store: MemoryStore = Depends(get_store)):
    return store.get_all_categories()


@router.get("/{category_id}", response_model=Category)
def get_category(category_id: int, store: MemoryStore = Depends(get_store)):
    category = store.get_category(category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.post("", response_model=Category, status_code=status.HTTP_201_CREATED)
def create_category(category: CategoryCreate, store: MemoryStore = Depends(get_store)):
    created = store.create_category(category)
    logger.info(f"Created category {created.id}: {created.name}")
    return created


@router.put("/{category_id}", response_model=Category)
def update_category(category_id: int, category_update: CategoryUpdate, store: MemoryStore = Depends(get_store)):
    updated = store.update_category(category_id, category_update.model_dump(exclude_unset=True))
    if not updated:
        raise HTTPException(status_code=404, detail="Category not found")
    logger.info(f"Updated category {category_id}")
    return updated


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: int, store: MemoryStore = Depends(get_store)):
    if not store.delete_category(category_id):
        raise HTTPException(status_code=404, detail="Category not found")
    logger.info(f"Deleted category {category_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
