"""Data storage layer."""

from festplan.storage.sqlite_repo import (
    add_inventory_item,
    create_fest,
    get_cocktail,
    get_connection,
    get_fest,
    get_prices,
    get_stock,
    init_database,
    insert_cocktail,
    list_cocktails,
    list_fest_dates,
    list_inventory,
    open_or_create_database,
    rename_cocktail,
    set_availability,
    set_fest_cocktail,
    set_price,
    update_cocktail_ingredient,
)

__all__ = [
    "get_connection",
    "init_database",
    "open_or_create_database",
    "insert_cocktail",
    "list_cocktails",
    "get_cocktail",
    "rename_cocktail",
    "update_cocktail_ingredient",
    "add_inventory_item",
    "list_inventory",
    "get_stock",
    "get_prices",
    "set_availability",
    "set_price",
    "create_fest",
    "list_fest_dates",
    "get_fest",
    "set_fest_cocktail",
]
