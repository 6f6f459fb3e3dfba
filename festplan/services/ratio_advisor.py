"""
Fest Ratio Advisor

Compares planned servings with the expected guest count.
About two cocktails per guest is the target.
"""

from typing import Dict

from festplan.errors import ConfigError
from festplan.models.common import Verdict
from festplan.models.fests import RatioAdvice

TARGET_RATIO = 2.0
LOW_RATIO = 1.6
HIGH_RATIO = 2.4


def advise_ratio(planned_counts: Dict[str, int], expected_guests: int) -> RatioAdvice:
    """Compute servings per guest and judge it. Both boundaries are inclusive."""
    if expected_guests <= 0:
        raise ConfigError(
            f"expected guest count must be positive, got {expected_guests}",
            details={"expected_guests": expected_guests},
        )

    total_planned = sum(planned_counts.values())
    ratio = total_planned / expected_guests

    if ratio <= LOW_RATIO:
        verdict = Verdict.LOW
    elif ratio >= HIGH_RATIO:
        verdict = Verdict.HIGH
    else:
        verdict = Verdict.OK

    return RatioAdvice(
        total_planned=total_planned,
        expected_guests=expected_guests,
        ratio=ratio,
        verdict=verdict,
    )
