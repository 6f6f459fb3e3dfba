"""
Fest Models

A fest is one event night, identified by its date. Each selected cocktail
carries the number of servings planned and the sale price.
"""

from typing import Dict, List

import pandas as pd
from pydantic import BaseModel, Field

from festplan.models.common import Verdict


# ============================================================================
# Fest Selection Models
# ============================================================================

class FestCocktail(BaseModel):
    """A cocktail selected for a fest."""

    cocktail: str
    amount: int = Field(default=0, ge=0, description="Servings planned")
    price: int = Field(default=0, ge=0, description="Sale price in cents")


class Fest(BaseModel):
    """A fest and its cocktail selection."""

    date: str
    cocktails: Dict[str, FestCocktail] = Field(default_factory=dict)

    @property
    def cocktail_names(self) -> List[str]:
        """Selected cocktails, sorted so numbered choices are stable."""
        return sorted(self.cocktails)

    @property
    def planned_counts(self) -> Dict[str, int]:
        return {name: sel.amount for name, sel in self.cocktails.items()}

    @property
    def total_planned(self) -> int:
        return sum(sel.amount for sel in self.cocktails.values())

    def to_dataframe(self) -> pd.DataFrame:
        """Selection as a table, one row per cocktail."""
        rows = [
            {
                "cocktail": name,
                "planned": self.cocktails[name].amount,
                "price": self.cocktails[name].price / 100,
            }
            for name in self.cocktail_names
        ]
        return pd.DataFrame(rows, columns=["cocktail", "planned", "price"])


# ============================================================================
# Computed Planning Models
# ============================================================================

class ShoppingList(BaseModel):
    """
    What has to be bought for a fest.

    Derived from recipes, stock and the fest plan. Never persisted.
    """

    required: Dict[str, float] = Field(
        default_factory=dict,
        description="Ingredient -> liters to buy, never negative",
    )
    cost: Dict[str, float] = Field(
        default_factory=dict,
        description="Ingredient -> estimated cost in cents",
    )

    @property
    def total_cost(self) -> float:
        return sum(self.cost.values())

    def to_dataframe(self) -> pd.DataFrame:
        """Shopping list as a table sorted by ingredient."""
        rows = [
            {
                "ingredient": name,
                "amount": self.required[name],
                "price": self.cost.get(name, 0.0) / 100,
            }
            for name in sorted(self.required)
        ]
        return pd.DataFrame(rows, columns=["ingredient", "amount", "price"])


class RatioAdvice(BaseModel):
    """Cocktails-per-guest ratio with a verdict."""

    total_planned: int
    expected_guests: int
    ratio: float
    verdict: Verdict

    @property
    def message(self) -> str:
        if self.verdict == Verdict.LOW:
            return "This ratio should be around 2, it is a bit low."
        if self.verdict == Verdict.HIGH:
            return "This ratio should be around 2, it is a bit high."
        return (
            "This ratio should be around 2, so, it is looking good. "
            "Remember not to calculate for too many people ;)"
        )
