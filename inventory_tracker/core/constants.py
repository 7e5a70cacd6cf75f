CATEGORIES = (
    "Accessories",
    "Electronics",
    "Furniture",
    "Printing",
    "Audio",
    "Office",
    "Storage",
)

STOCK_IN = "In stock"
STOCK_OUT = "Out of stock"
STOCK_STATUSES = (STOCK_IN, STOCK_OUT)

FILTER_ALL = "all"

MAX_COST_UNIT = 1_000_000
INVENTORY_ID_MAX_LENGTH = 50
PRODUCT_NAME_MAX_LENGTH = 100
SUPPLIER_MAX_LENGTH = 100
WAREHOUSE_MAX_LENGTH = 20

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
PASSWORD_MIN_LENGTH = 6
