from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from inventory_tracker.core.tokens import TokenClaims
from inventory_tracker.dependencies import get_current_user, get_db
from inventory_tracker.schemas.inventory import (
    DeleteResponse,
    InventoryRead,
    InventoryStats,
    InventoryWrite,
)
from inventory_tracker.services import inventory_service, query_service

router = APIRouter(prefix="/inventory", tags=["Inventory"])


@router.get("", response_model=list[InventoryRead])
def list_inventory(
    search: Optional[str] = Query(None, description="Matches product, category, supplier, ID or warehouse"),
    category: Optional[str] = Query(None, description="Exact category, or 'all'"),
    stock: Optional[str] = Query(None, description="'In stock', 'Out of stock', or 'all'"),
    db: Session = Depends(get_db),
    user: TokenClaims = Depends(get_current_user),
):
    return query_service.query_items(db, user.id, term=search, category=category, stock=stock)


@router.post("", response_model=InventoryRead, status_code=status.HTTP_201_CREATED)
def create_inventory(
    payload: InventoryWrite,
    db: Session = Depends(get_db),
    user: TokenClaims = Depends(get_current_user),
):
    return inventory_service.create_item(db, user.id, payload.model_dump())


@router.get("/stats", response_model=InventoryStats)
def inventory_stats(
    db: Session = Depends(get_db),
    user: TokenClaims = Depends(get_current_user),
):
    return query_service.compute_stats(db, user.id)


@router.get("/{item_id}", response_model=InventoryRead)
def get_inventory(
    item_id: int,
    db: Session = Depends(get_db),
    user: TokenClaims = Depends(get_current_user),
):
    return inventory_service.get_owned_item(db, user.id, item_id)


@router.put("/{item_id}", response_model=InventoryRead)
def update_inventory(
    item_id: int,
    payload: InventoryWrite,
    db: Session = Depends(get_db),
    user: TokenClaims = Depends(get_current_user),
):
    return inventory_service.update_item(db, user.id, item_id, payload.model_dump(exclude_unset=True))


@router.delete("/{item_id}", response_model=DeleteResponse)
def delete_inventory(
    item_id: int,
    db: Session = Depends(get_db),
    user: TokenClaims = Depends(get_current_user),
):
    inventory_service.delete_item(db, user.id, item_id)
    return DeleteResponse(message="Item deleted successfully")


__all__ = ["router"]
