import importlib

from inventory_tracker.models.account import Account
from inventory_tracker.models.inventory import InventoryItem


def import_all_models() -> None:
    for module_name in (
        "inventory_tracker.models.account",
        "inventory_tracker.models.inventory",
    ):
        importlib.import_module(module_name)


__all__ = [
    "Account",
    "InventoryItem",
    "import_all_models",
]
