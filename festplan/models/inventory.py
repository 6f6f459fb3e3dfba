"""
Inventory Models

One line per ingredient: what is on the shelf and what a liter costs.
"""

from pydantic import BaseModel, Field


class InventoryLine(BaseModel):
    """An ingredient in stock."""

    name: str = Field(..., min_length=1, description="Unique ingredient name")
    available: float = Field(default=0.0, ge=0, allow_inf_nan=False, description="Liters on hand")
    price: int = Field(default=0, ge=0, description="Cents per liter")

    @property
    def value(self) -> float:
        """Value of the stock on hand, in cents."""
        return self.available * self.price
