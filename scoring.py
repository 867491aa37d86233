"""Shot scoring and the mastery counter that drives expert mode."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Optional

from ballistics import ImpactPoint


TARGET_SIZE_CM = 45.0  # outer ring diameter
SCORING_ZONES = 6  # rings 10 down to 5
MIN_HIT_RINGS = 5
EXPERT_MODE_THRESHOLD = 3


@dataclass(frozen=True)
class ShotResult:
    """Outcome of a single fire action."""

    hit: bool
    rings: int
    drop_error: float  # cm, positive = high
    wind_error: float  # cm, positive = right
    timestamp: int  # epoch milliseconds

    @property
    def error_magnitude(self) -> float:
        return math.hypot(self.wind_error, self.drop_error)


def ring_value(error_magnitude: float, target_diameter_cm: float = TARGET_SIZE_CM) -> int:
    """Rings for a radial error, 0 when outside the target."""
    radius = target_diameter_cm / 2
    if not error_magnitude < radius:
        return 0
    ring_width = radius / SCORING_ZONES
    rings = 10 - math.floor(error_magnitude / ring_width)
    return max(MIN_HIT_RINGS, rings)


def score_shot(impact: ImpactPoint, target_diameter_cm: float = TARGET_SIZE_CM,
               timestamp: Optional[int] = None) -> ShotResult:
    """Score an impact against a circular target.

    A hit requires the radial error to be strictly inside the target radius.
    Hits score at least five rings.
    """
    error = math.hypot(impact.x, impact.y)
    rings = ring_value(error, target_diameter_cm)
    if timestamp is None:
        timestamp = int(time.time() * 1000)
    return ShotResult(
        hit=rings > 0,
        rings=rings,
        drop_error=impact.y,
        wind_error=impact.x,
        timestamp=timestamp,
    )


def update_mastery(mastery: int, result: ShotResult) -> int:
    """Apply one shot to the mastery counter."""
    if not result.hit:
        return 0
    if result.rings == 10:
        return mastery + 2
    if result.rings >= 7:
        return mastery + 1
    return max(0, mastery - 1)


def is_expert_mode(mastery: int) -> bool:
    """Expert mode suppresses briefing hints."""
    return mastery >= EXPERT_MODE_THRESHOLD
