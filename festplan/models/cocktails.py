"""
Cocktail Models

A cocktail is a name plus the liters of each ingredient one serving needs.
"""

import math
from typing import Dict

from pydantic import BaseModel, Field, field_validator


class Cocktail(BaseModel):
    """A cocktail recipe."""

    name: str = Field(..., min_length=1, description="Unique cocktail name")
    ingredients: Dict[str, float] = Field(
        default_factory=dict,
        description="Ingredient name -> liters per serving",
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cocktail name must not be empty")
        return v

    @field_validator("ingredients")
    @classmethod
    def positive_amounts(cls, v: Dict[str, float]) -> Dict[str, float]:
        """Every per-serving amount must be a positive number of liters."""
        for ingredient, amount in v.items():
            if not math.isfinite(amount) or amount <= 0:
                raise ValueError(f"amount for {ingredient} must be positive, got {amount}")
        return v

    def with_ingredient(self, ingredient: str, amount: float) -> "Cocktail":
        """Return a copy with one ingredient set. Last write wins."""
        ingredients = dict(self.ingredients)
        ingredients[ingredient] = amount
        return Cocktail(name=self.name, ingredients=ingredients)
