"""Common types used across the planning system."""

from enum import Enum


class Verdict(str, Enum):
    """Cocktails-per-guest planning verdict."""
    LOW = "LOW"
    OK = "OK"
    HIGH = "HIGH"
