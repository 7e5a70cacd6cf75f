from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

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
from inventory_tracker.database.base import Base


def _in_list(column: str, values) -> str:
    quoted = ", ".join("'{}'".format(value) for value in values)
    return "{} IN ({})".format(column, quoted)


class InventoryItem(Base):
    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True)

    inventory_id = Column(String(INVENTORY_ID_MAX_LENGTH), nullable=False, unique=True)
    product_name = Column(String(PRODUCT_NAME_MAX_LENGTH), nullable=False)
    category = Column(String(32), nullable=False)
    supplier = Column(String(SUPPLIER_MAX_LENGTH), nullable=False)
    stock = Column(String(16), nullable=False, default=STOCK_IN)
    cost_unit = Column(Float, nullable=False)
    warehouse = Column(String(WAREHOUSE_MAX_LENGTH), nullable=False)

    last_updated = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    user_id = Column(Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False)
    owner = relationship("Account", back_populates="items")

    __table_args__ = (
        Index("idx_inventory_owner_updated", "user_id", "last_updated"),
        CheckConstraint(
            "cost_unit >= 0 AND cost_unit <= {}".format(MAX_COST_UNIT),
            name="ck_inventory_cost_unit_range",
        ),
        CheckConstraint(_in_list("category", CATEGORIES), name="ck_inventory_category"),
        CheckConstraint(_in_list("stock", STOCK_STATUSES), name="ck_inventory_stock"),
    )


__all__ = ["InventoryItem"]
