"""
Shopping List Engine

Turns a fest plan into a shopping list:
1. Sum per-serving ingredient amounts over the planned servings
2. Subtract what is already in stock
3. Floor at zero (surplus is never "returned")
4. Price the deficit
"""

import logging
from typing import Dict, Iterable, Optional

from festplan.models.cocktails import Cocktail
from festplan.models.fests import ShoppingList

logger = logging.getLogger(__name__)


def compute_shopping_list(
    cocktails: Iterable[Cocktail],
    inventory: Dict[str, float],
    fest_plan: Dict[str, int],
    prices: Optional[Dict[str, int]] = None,
) -> ShoppingList:
    """
    Compute what to buy for a fest.

    Args:
        cocktails: All known recipes
        inventory: Ingredient -> liters available (missing means 0)
        fest_plan: Cocktail name -> planned servings (missing means 0)
        prices: Ingredient -> cents per liter (missing means 0)

    Returns:
        ShoppingList with required liters and cost in cents

    Plan entries naming a cocktail with no recipe are ignored.
    """
    cocktails = list(cocktails)
    prices = prices or {}
    required: Dict[str, float] = {}

    # Step 1: Aggregate demand
    for cocktail in cocktails:
        servings = fest_plan.get(cocktail.name, 0)
        if not servings:
            continue
        for ingredient, per_serving in cocktail.ingredients.items():
            required[ingredient] = required.get(ingredient, 0.0) + servings * per_serving

    unknown = set(fest_plan) - {c.name for c in cocktails}
    if unknown:
        logger.debug(f"Ignoring planned cocktails without recipe: {sorted(unknown)}")

    # Step 2 and 3: Net against stock, floor at zero
    for ingredient in required:
        net = required[ingredient] - inventory.get(ingredient, 0.0)
        required[ingredient] = net if net > 0 else 0.0

    # Step 4: Price
    cost = {
        ingredient: need * prices.get(ingredient, 0)
        for ingredient, need in required.items()
    }

    return ShoppingList(required=required, cost=cost)
