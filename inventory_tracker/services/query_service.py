from typing import Iterable, Optional

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from inventory_tracker.core.constants import FILTER_ALL, STOCK_IN, STOCK_OUT
from inventory_tracker.models.inventory import InventoryItem
from inventory_tracker.services.inventory_service import list_by_owner

SEARCH_ATTRIBUTES = ("product_name", "category", "supplier", "inventory_id", "warehouse")


def _normalize_term(term: Optional[str]) -> str:
    if term is None:
        return ""
    return str(term).strip().casefold()


def _normalize_selection(value: Optional[str]) -> Optional[str]:
    """Lower-cased selection, or None when the filter is disabled."""
    if value is None:
        return None
    key = str(value).strip().lower()
    if not key or key == FILTER_ALL:
        return None
    return key


def matches_term(item, term: Optional[str]) -> bool:
    needle = _normalize_term(term)
    if not needle:
        return True
    for attribute in SEARCH_ATTRIBUTES:
        value = getattr(item, attribute, None)
        if value is not None and needle in str(value).casefold():
            return True
    return False


def search(db: Session, owner_id: int, term: Optional[str] = None) -> list[InventoryItem]:
    # SQLite's LOWER() only folds ASCII, so the term is matched in Python
    items = list_by_owner(db, owner_id)
    if not _normalize_term(term):
        return items
    return [item for item in items if matches_term(item, term)]


def filter_by_category(records: Iterable, category: Optional[str]) -> list:
    wanted = _normalize_selection(category)
    if wanted is None:
        return list(records)
    return [record for record in records if (record.category or "").lower() == wanted]


def filter_by_stock(records: Iterable, status: Optional[str]) -> list:
    wanted = _normalize_selection(status)
    if wanted is None:
        return list(records)
    return [record for record in records if (record.stock or "").lower() == wanted]


def query_items(
    db: Session,
    owner_id: int,
    term: Optional[str] = None,
    category: Optional[str] = None,
    stock: Optional[str] = None,
) -> list[InventoryItem]:
    results = search(db, owner_id, term)
    results = filter_by_category(results, category)
    return filter_by_stock(results, stock)


def compute_stats(db: Session, owner_id: int) -> dict:
    in_stock = InventoryItem.stock == STOCK_IN
    stmt = select(
        func.count(InventoryItem.id),
        func.coalesce(func.sum(case((in_stock, 1), else_=0)), 0),
        func.coalesce(func.sum(case((InventoryItem.stock == STOCK_OUT, 1), else_=0)), 0),
        # out-of-stock items carry no sellable value
        func.coalesce(func.sum(case((in_stock, InventoryItem.cost_unit), else_=0.0)), 0.0),
    ).where(InventoryItem.user_id == owner_id)

    total, in_stock_count, out_of_stock_count, total_value = db.execute(stmt).one()
    return {
        "total_items": int(total or 0),
        "in_stock_items": int(in_stock_count or 0),
        "out_of_stock_items": int(out_of_stock_count or 0),
        "total_value": float(total_value or 0.0),
    }
