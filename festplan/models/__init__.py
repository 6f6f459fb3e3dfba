"""Data models for Festplan."""

from festplan.models.cocktails import Cocktail
from festplan.models.common import Verdict
from festplan.models.fests import Fest, FestCocktail, RatioAdvice, ShoppingList
from festplan.models.inventory import InventoryLine

__all__ = [
    # Common
    "Verdict",
    # Cocktails
    "Cocktail",
    # Inventory
    "InventoryLine",
    # Fests
    "Fest",
    "FestCocktail",
    "ShoppingList",
    "RatioAdvice",
]
