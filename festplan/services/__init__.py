"""
Festplan Business Logic Services

Pure functions with no storage or UI dependencies.
"""

from festplan.services.ratio_advisor import advise_ratio
from festplan.services.shopping_list import compute_shopping_list
from festplan.services.valuation import inventory_value

__all__ = [
    "compute_shopping_list",
    "advise_ratio",
    "inventory_value",
]
