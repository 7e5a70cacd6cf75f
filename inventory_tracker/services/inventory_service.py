import logging
import math
from datetime import datetime, timezone
from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from inventory_tracker.core.constants import (
    CATEGORIES,
    INVENTORY_ID_MAX_LENGTH,
    MAX_COST_UNIT,
    PRODUCT_NAME_MAX_LENGTH,
    STOCK_IN,
    STOCK_STATUSES,
    SUPPLIER_MAX_LENGTH,
    WAREHOUSE_MAX_LENGTH,
)
from inventory_tracker.core.errors import (
    DuplicateInventoryId,
    Forbidden,
    NotFound,
    StorageError,
    ValidationError,
)
from inventory_tracker.models.inventory import InventoryItem

logger = logging.getLogger(__name__)

# attribute name -> name used in request/response bodies and error maps
FIELD_NAMES = {
    "inventory_id": "inventoryId",
    "product_name": "productName",
    "category": "category",
    "supplier": "supplier",
    "stock": "stock",
    "cost_unit": "costUnit",
    "warehouse": "warehouse",
}

_LABELS = {
    "inventory_id": "Inventory ID",
    "product_name": "Product name",
    "category": "Category",
    "supplier": "Supplier",
    "stock": "Stock status",
    "cost_unit": "Cost per unit",
    "warehouse": "Warehouse",
}


def _clean_text(value, label, max_length, *, upper=False):
    if not isinstance(value, str):
        raise ValueError("{} must be text".format(label))
    value = value.strip()
    if not value:
        raise ValueError("{} is required".format(label))
    if len(value) > max_length:
        raise ValueError("{} cannot exceed {} characters".format(label, max_length))
    return value.upper() if upper else value


def _clean_choice(value, label, choices):
    if not isinstance(value, str) or value not in choices:
        raise ValueError("{} is not a valid {}".format(value, label.lower()))
    return value


def _clean_cost(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("Cost per unit must be a number")
    value = float(value)
    if not math.isfinite(value):
        raise ValueError("Cost per unit must be a number")
    if value < 0:
        raise ValueError("Cost cannot be negative")
    if value > MAX_COST_UNIT:
        raise ValueError("Cost cannot exceed $1,000,000")
    return value


_CLEANERS = {
    "inventory_id": lambda v: _clean_text(v, _LABELS["inventory_id"], INVENTORY_ID_MAX_LENGTH, upper=True),
    "product_name": lambda v: _clean_text(v, _LABELS["product_name"], PRODUCT_NAME_MAX_LENGTH),
    "category": lambda v: _clean_choice(v, "category", CATEGORIES),
    "supplier": lambda v: _clean_text(v, _LABELS["supplier"], SUPPLIER_MAX_LENGTH),
    "stock": lambda v: _clean_choice(v, "stock status", STOCK_STATUSES),
    "cost_unit": _clean_cost,
    "warehouse": lambda v: _clean_text(v, _LABELS["warehouse"], WAREHOUSE_MAX_LENGTH, upper=True),
}


def validate_fields(fields: Mapping[str, Any], *, partial: bool = False) -> dict[str, Any]:
    """Normalize and check record fields.

    With ``partial=False`` every field is required except ``stock``, which
    defaults to "In stock". With ``partial=True`` only the supplied keys are
    checked. Unknown keys are ignored. Raises ValidationError mapping the
    external field name to a message for every violation found.
    """
    values = {key: fields[key] for key in FIELD_NAMES if key in fields}
    if not partial and values.get("stock") is None:
        values["stock"] = STOCK_IN

    errors = {}
    cleaned = {}
    keys = values.keys() if partial else FIELD_NAMES.keys()
    for key in keys:
        value = values.get(key)
        if value is None:
            errors[FIELD_NAMES[key]] = "{} is required".format(_LABELS[key])
            continue
        try:
            cleaned[key] = _CLEANERS[key](value)
        except ValueError as exc:
            errors[FIELD_NAMES[key]] = str(exc)

    if errors:
        raise ValidationError(errors)
    return cleaned


def _now():
    return datetime.now(timezone.utc)


def _commit(db: Session, inventory_id: str, record_id=None) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        clash = (
            db.execute(
                select(InventoryItem.id).where(InventoryItem.inventory_id == inventory_id)
            )
            .scalars()
            .first()
        )
        if clash is not None and clash != record_id:
            raise DuplicateInventoryId() from exc
        logger.exception("Integrity error while saving inventory item")
        raise StorageError() from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to save inventory item")
        raise StorageError() from exc


def get_owned_item(db: Session, owner_id: int, record_id: int) -> InventoryItem:
    item = db.get(InventoryItem, record_id)
    if item is None:
        raise NotFound("Inventory item not found")
    if item.user_id != owner_id:
        raise Forbidden()
    return item


def create_item(db: Session, owner_id: int, fields: Mapping[str, Any]) -> InventoryItem:
    cleaned = validate_fields(fields)
    item = InventoryItem(**cleaned, user_id=owner_id, last_updated=_now())
    db.add(item)
    _commit(db, item.inventory_id)
    db.refresh(item)
    logger.info("Created inventory item %s for account id=%s", item.inventory_id, owner_id)
    return item


def update_item(db: Session, owner_id: int, record_id: int, fields: Mapping[str, Any]) -> InventoryItem:
    item = get_owned_item(db, owner_id, record_id)
    cleaned = validate_fields(fields, partial=True)

    inventory_id = cleaned.get("inventory_id", item.inventory_id)
    for key, value in cleaned.items():
        setattr(item, key, value)
    item.last_updated = _now()

    _commit(db, inventory_id, record_id=item.id)
    db.refresh(item)
    logger.info("Updated inventory item id=%s for account id=%s", item.id, owner_id)
    return item


def delete_item(db: Session, owner_id: int, record_id: int) -> None:
    item = get_owned_item(db, owner_id, record_id)
    db.delete(item)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to delete inventory item id=%s", record_id)
        raise StorageError() from exc
    logger.info("Deleted inventory item id=%s for account id=%s", record_id, owner_id)


def list_by_owner(db: Session, owner_id: int) -> list[InventoryItem]:
    return list(
        db.execute(
            select(InventoryItem)
            .where(InventoryItem.user_id == owner_id)
            .order_by(InventoryItem.last_updated.desc(), InventoryItem.id.desc())
        )
        .scalars()
        .all()
    )
