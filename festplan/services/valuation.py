"""Inventory valuation."""

from typing import Dict


def inventory_value(stock: Dict[str, float], prices: Dict[str, int]) -> float:
    """Value of everything on the shelf, in cents."""
    return sum(available * prices.get(name, 0) for name, available in stock.items())
