from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InventoryWrite(_CamelModel):
    # Only types are enforced here; field rules live in inventory_service.validate_fields
    # so that create and update report violations the same way.
    inventory_id: Optional[str] = None
    product_name: Optional[str] = None
    category: Optional[str] = None
    supplier: Optional[str] = None
    stock: Optional[str] = None
    cost_unit: Optional[float] = None
    warehouse: Optional[str] = None


class InventoryRead(_CamelModel):
    id: int
    inventory_id: str
    product_name: str
    category: str
    supplier: str
    stock: str
    cost_unit: float
    warehouse: str
    last_updated: datetime
    user_id: int

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class InventoryStats(_CamelModel):
    total_items: int
    in_stock_items: int
    out_of_stock_items: int
    total_value: float


class DeleteResponse(BaseModel):
    success: bool = True
    message: str
