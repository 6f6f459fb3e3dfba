"""
Festplan Core Package

Pure business logic for cocktail recipes, bar inventory and fest planning.
No UI code in this package.
"""

__version__ = "1.0.0"

from festplan.models.cocktails import Cocktail
from festplan.models.fests import Fest, FestCocktail, RatioAdvice, ShoppingList
from festplan.models.inventory import InventoryLine

__all__ = [
    "Cocktail",
    "InventoryLine",
    "Fest",
    "FestCocktail",
    "ShoppingList",
    "RatioAdvice",
]
