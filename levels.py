"""Level tables for training and campaign play, plus environment generation.

Each level bounds the randomised scenario: a distance window, a wind speed
window and optional fixed wind direction and temperature. The generator
takes an explicit ``random.Random`` so callers can reproduce a scenario.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from ballistics import Environment, STANDARD_TEMP


class GameMode(Enum):
    """Level sets available from the menu."""

    TRAINING = "training"
    CAMPAIGN = "campaign"


@dataclass(frozen=True)
class LevelText:
    """Briefing copy; never read by the simulation."""

    title: str
    description: str
    hint: str


@dataclass(frozen=True)
class LevelConstraints:
    """Bounds for the generated environment."""

    min_dist: int
    max_dist: int
    min_wind: float
    max_wind: float
    fixed_wind_dir: Optional[float] = None
    fixed_temp: Optional[float] = None
    disable_sway: bool = False


@dataclass(frozen=True)
class LevelConfig:
    """Static definition of a single level."""

    id: str
    text: LevelText
    constraints: LevelConstraints

    def active_factors(self) -> List[str]:
        """Factors a briefing should flag for this level."""
        c = self.constraints
        factors = []
        if c.min_wind > 0 or c.max_wind > 0:
            factors.append("wind")
        if c.fixed_temp is not None and abs(c.fixed_temp - STANDARD_TEMP) > 5:
            factors.append("temperature")
        if c.max_dist != c.min_dist:
            factors.append("range")
        if not c.disable_sway:
            factors.append("sway")
        return factors


TRAINING_LEVELS: List[LevelConfig] = [
    LevelConfig(
        id="t1",
        text=LevelText(
            title="Lesson 1: Gravity Basics",
            description=(
                "We start with the absolute basics. The target is fixed at 300m. "
                "The rifle is clamped in a rest (NO SWAY). There is NO WIND.\n\n"
                "Your only task is to compensate for bullet drop."
            ),
            hint="1. Check Range Card for 300m.\n2. Dial Elevation UP to match.\n3. Aim Center. Fire.",
        ),
        constraints=LevelConstraints(
            min_dist=300, max_dist=300, min_wind=0, max_wind=0,
            fixed_temp=15, disable_sway=True,
        ),
    ),
    LevelConfig(
        id="t2",
        text=LevelText(
            title="Lesson 2: Windage",
            description=(
                "Now we introduce Wind. The target is at 400m. We have a consistent "
                "5 m/s crosswind from the RIGHT.\n\n"
                "The rifle is still clamped (NO SWAY). Focus on the Windage turret."
            ),
            hint=(
                "1. Dial Elevation for 400m.\n2. Wind is pushing LEFT.\n"
                "3. Dial Windage RIGHT (approx 0.9 MIL).\n4. Fire."
            ),
        ),
        constraints=LevelConstraints(
            min_dist=400, max_dist=400, min_wind=5, max_wind=5,
            fixed_wind_dir=90, fixed_temp=15, disable_sway=True,
        ),
    ),
    LevelConfig(
        id="t3",
        text=LevelText(
            title="Lesson 3: Stability (Sway)",
            description=(
                "We are removing the rifle clamp. You must now manage WEAPON SWAY.\n\n"
                "Target is close (300m). No Wind.\n\nHold your breath before firing."
            ),
            hint=(
                "1. Dial Elevation for 300m.\n2. Align reticle.\n"
                "3. Hold breath to stabilize.\n4. Fire while stable."
            ),
        ),
        constraints=LevelConstraints(
            min_dist=300, max_dist=300, min_wind=0, max_wind=0, fixed_temp=15,
        ),
    ),
    LevelConfig(
        id="t4",
        text=LevelText(
            title="Lesson 4: Temperature",
            description=(
                "Advanced atmospherics. Target at 600m in EXTREME HEAT (35°C).\n\n"
                "Hot air is less dense -> Less drag -> Bullet drops LESS."
            ),
            hint=(
                "1. Check chart for 600m.\n"
                "2. Because it is HOT, dial slightly LESS Elevation (-0.1 or -0.2).\n"
                "3. Hold breath and fire."
            ),
        ),
        constraints=LevelConstraints(
            min_dist=600, max_dist=600, min_wind=0, max_wind=0, fixed_temp=35,
        ),
    ),
    LevelConfig(
        id="t5",
        text=LevelText(
            title="Lesson 5: Combined Test",
            description=(
                "Final Training. 500m Target. Moderate Wind. Standard Temp. "
                "Sway is active.\n\nApply everything you have learned."
            ),
            hint=(
                "1. Elevation for 500m.\n2. Check Wind speed/dir -> Calculate Windage.\n"
                "3. Hold Breath -> Fire."
            ),
        ),
        constraints=LevelConstraints(
            min_dist=500, max_dist=500, min_wind=2, max_wind=4, fixed_temp=15,
        ),
    ),
]

CAMPAIGN_LEVELS: List[LevelConfig] = [
    LevelConfig(
        id="c1",
        text=LevelText(
            title="Qualification: Stationary",
            description=(
                "Standard qualification target. Conditions are ideal. "
                "Prove you can hit a fixed target before we deploy you."
            ),
            hint="Target fixed at 300m. No Wind. Set Elevation to match Range Card exactly.",
        ),
        constraints=LevelConstraints(
            min_dist=300, max_dist=300, min_wind=0, max_wind=0, fixed_temp=15,
        ),
    ),
    LevelConfig(
        id="c2",
        text=LevelText(
            title="Mission: Gentle Breeze",
            description=(
                "Target sighted in open field. Distance is known. Light crosswind "
                "detected. Introduce windage corrections to your workflow."
            ),
            hint=(
                "Target fixed at 500m. Wind is light (1-3 m/s). Calculate drop, then "
                "check wind direction. Small windage adjustment required."
            ),
        ),
        constraints=LevelConstraints(
            min_dist=500, max_dist=500, min_wind=1, max_wind=3, fixed_temp=15,
        ),
    ),
    LevelConfig(
        id="c3",
        text=LevelText(
            title="Mission: Variable Range",
            description=(
                "Target is moving between positions. You must identify the range "
                "yourself using the Atmospherics panel before engaging."
            ),
            hint="Distance is NOT fixed. Check DIST first! Then check Range Card.",
        ),
        constraints=LevelConstraints(
            min_dist=300, max_dist=600, min_wind=0, max_wind=2, fixed_temp=15,
        ),
    ),
    LevelConfig(
        id="c4",
        text=LevelText(
            title="Mission: Heat Haze",
            description=(
                "High value target in desert sector. High temperatures and moderate "
                "winds. You must account for all environmental factors."
            ),
            hint=(
                "Distance varies. Temp is High (30°C+). Bullet will impact higher than "
                "chart says. Reduce Elevation slightly."
            ),
        ),
        constraints=LevelConstraints(
            min_dist=500, max_dist=800, min_wind=3, max_wind=6, fixed_temp=35,
        ),
    ),
    LevelConfig(
        id="c5",
        text=LevelText(
            title="Mission: Long Range Storm",
            description=(
                "Extreme distance. High wind variance. Sub-zero temperatures. "
                "This is the ultimate test of a sniper."
            ),
            hint=(
                "Check ALL factors: Distance, Temp (Cold = Add Elev), "
                "Wind Speed & Direction. Good luck."
            ),
        ),
        constraints=LevelConstraints(
            min_dist=800, max_dist=1100, min_wind=5, max_wind=12, fixed_temp=-5,
        ),
    ),
]


def levels_for(mode: GameMode) -> Sequence[LevelConfig]:
    """Level list for ``mode``."""
    if mode is GameMode.TRAINING:
        return TRAINING_LEVELS
    return CAMPAIGN_LEVELS


def generate_level_environment(level: LevelConfig,
                               rng: Optional[random.Random] = None) -> Environment:
    """Roll a new environment within the level's constraints."""
    rng = rng or random.Random()
    c = level.constraints

    distance = rng.randint(int(c.min_dist), int(c.max_dist))
    wind_speed = round(rng.uniform(c.min_wind, c.max_wind), 1)
    wind_direction = (
        c.fixed_wind_dir if c.fixed_wind_dir is not None else rng.randrange(360)
    )
    temperature = c.fixed_temp if c.fixed_temp is not None else rng.randrange(35)
    humidity = rng.randrange(20, 80)

    return Environment(
        wind_speed=wind_speed,
        wind_direction=wind_direction,
        temperature=temperature,
        humidity=humidity,
        distance=distance,
    )
