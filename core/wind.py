"""Headwind/crosswind decomposition of a reported wind against a runway heading."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
import math

from config import config


@dataclass(frozen=True)
class WindComponents:
    """Wind resolved along and across a runway (knots, same unit as input)."""

    headwind: float             # Negative = tailwind
    crosswind: float            # Positive = from the right
    crosswind_speed: float
    tailwind: float
    is_tailwind: bool
    crosswind_direction: str


def _round_half_away(value: float, decimals: int) -> float:
    # Exact binary value, ties away from zero (0.125 -> 0.13, -0.125 -> -0.13)
    quantum = Decimal(10) ** -decimals
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def wind_components(
    runway_heading_deg: float, wind_direction_deg: float, wind_speed: float
) -> WindComponents:
    """Resolve a wind into runway components.

    Components are rounded to the configured precision first, exact ties
    away from zero; the tailwind and direction fields are derived from the
    rounded values.
    """
    decimals = config.wind.rounding_decimals
    angle = math.radians(wind_direction_deg) - math.radians(runway_heading_deg)

    headwind = _round_half_away(wind_speed * math.cos(angle), decimals)
    crosswind = _round_half_away(wind_speed * math.sin(angle), decimals)

    return WindComponents(
        headwind=headwind,
        crosswind=crosswind,
        crosswind_speed=abs(crosswind),
        tailwind=max(0.0, -headwind),
        is_tailwind=headwind < 0,
        crosswind_direction=(
            config.wind.label_from_right if crosswind >= 0 else config.wind.label_from_left
        ),
    )
