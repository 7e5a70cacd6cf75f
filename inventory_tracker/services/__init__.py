from inventory_tracker.services import account_service, inventory_service, query_service

__all__ = [
    "account_service",
    "inventory_service",
    "query_service",
]
