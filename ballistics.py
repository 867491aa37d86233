"""
Ballistics Module for the Long Range trainer.

A deliberately simplified, empirical ballistic model: time of flight uses a
fixed velocity decay factor instead of drag integration, the temperature
correction is a linear density factor, and wind drift follows a power curve
tuned for gameplay. All functions here are pure.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Dict, List, NamedTuple, Sequence, Tuple

import numpy as np


GRAVITY = 9.81  # m/s^2
MUZZLE_VELOCITY = 850.0  # m/s, generic .308 Win
VELOCITY_DECAY = 0.92  # average velocity as a fraction of muzzle velocity
STANDARD_TEMP = 15.0  # Celsius
DENSITY_TEMP_COEFFICIENT = 0.002  # drop change per degree from standard
WIND_DRIFT_EXPONENT = 1.8
WIND_DRIFT_SCALE = 0.15
TURRET_STEP = 0.1  # MIL per click
RANGE_TABLE_DISTANCES: Tuple[int, ...] = tuple(range(200, 1201, 100))


@dataclass(frozen=True)
class Environment:
    """Atmospheric and range conditions for a single attempt."""

    wind_speed: float = 0.0  # m/s
    wind_direction: float = 0.0  # degrees wind blows from (0 = head-on, 90 = from right)
    temperature: float = STANDARD_TEMP  # Celsius
    humidity: float = 50.0  # %, display only
    distance: float = 100.0  # meters

    def to_dict(self) -> Dict[str, float]:
        """Serialize the environment to a dictionary."""
        return {
            "wind_speed": float(self.wind_speed),
            "wind_direction": float(self.wind_direction),
            "temperature": float(self.temperature),
            "humidity": float(self.humidity),
            "distance": float(self.distance),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Environment":
        """Create an :class:`Environment` from a dictionary."""
        if data is None:
            raise ValueError("Environment payload is required")

        return cls(
            wind_speed=float(data.get("wind_speed", 0.0)),
            wind_direction=float(data.get("wind_direction", 0.0)),
            temperature=float(data.get("temperature", STANDARD_TEMP)),
            humidity=float(data.get("humidity", 50.0)),
            distance=float(data.get("distance", 100.0)),
        )


@dataclass(frozen=True)
class TurretState:
    """Dialed scope corrections in MIL (elevation up, windage right)."""

    elevation: float = 0.0
    windage: float = 0.0

    def adjusted(self, axis: str, delta: float) -> "TurretState":
        """Return a copy with ``axis`` moved by ``delta``, rounded to one decimal."""
        if axis not in ("elevation", "windage"):
            raise ValueError(f"Unknown turret axis: {axis}")
        value = round(getattr(self, axis) + delta, 1)
        return replace(self, **{axis: value})


class ImpactPoint(NamedTuple):
    """Impact offset from the point of aim in centimeters."""

    x: float  # positive = right
    y: float  # positive = high


class RangeTableEntry(NamedTuple):
    """Reference elevation for one distance."""

    distance: int  # meters
    elevation: float  # MIL


def time_of_flight(distance):
    """Approximate time of flight in seconds."""
    return distance / (MUZZLE_VELOCITY * VELOCITY_DECAY)


def density_factor(temperature: float) -> float:
    """Drop multiplier; hot air drops less, cold air drops more."""
    return 1 - (temperature - STANDARD_TEMP) * DENSITY_TEMP_COEFFICIENT


def bullet_drop_cm(distance, temperature: float):
    """Gravity drop corrected for temperature, in centimeters.

    Works element-wise when ``distance`` is a numpy array.
    """
    drop_m = 0.5 * GRAVITY * time_of_flight(distance) ** 2
    return drop_m * 100 * density_factor(temperature)


def wind_components(wind_speed: float, wind_direction: float) -> Tuple[float, float]:
    """Split the wind into (crosswind, headwind).

    Crosswind is positive when blowing from the right, headwind positive when
    blowing into the shooter's face.
    """
    angle = math.radians(wind_direction - 90)
    return wind_speed * math.cos(angle), -wind_speed * math.sin(angle)


def wind_drift_cm(distance: float, wind_speed: float, wind_direction: float) -> float:
    """Sideways drift in centimeters; positive when pushed left."""
    crosswind, _ = wind_components(wind_speed, wind_direction)
    return crosswind * (distance / 100) ** WIND_DRIFT_EXPONENT * WIND_DRIFT_SCALE


def mil_to_cm(distance: float) -> float:
    """Linear size of one MIL at ``distance`` meters."""
    return 10 * (distance / 100)


def calculate_impact(environment: Environment, turrets: TurretState) -> ImpactPoint:
    """Compute where the shot lands relative to the point of aim."""
    dist = environment.distance
    drop = bullet_drop_cm(dist, environment.temperature)
    drift = wind_drift_cm(dist, environment.wind_speed, environment.wind_direction)

    mil_cm = mil_to_cm(dist)
    elevation_cm = turrets.elevation * mil_cm
    windage_cm = turrets.windage * mil_cm

    return ImpactPoint(x=-drift + windage_cm, y=-drop + elevation_cm)


def build_range_table(temperature: float,
                      distances: Sequence[int] = RANGE_TABLE_DISTANCES) -> List[RangeTableEntry]:
    """Elevation needed at each reference distance, no wind, one decimal."""
    dist = np.asarray(distances, dtype=float)
    mils = bullet_drop_cm(dist, temperature) / (dist / 10)
    return [
        RangeTableEntry(distance=int(d), elevation=round(float(m), 1))
        for d, m in zip(distances, mils)
    ]
