"""Authoring checks for level tables.

The simulation trusts its level data; these checks exist for whoever edits
the tables and are run by the ``levels`` command and the test suite.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Set

from levels import LevelConfig


@dataclass(frozen=True)
class ValidationIssue:
    """Represents a level definition problem."""

    level_id: str
    field: str
    title: str
    message: str


def validate_level(level: LevelConfig) -> List[ValidationIssue]:
    """Validate a single level definition.

    Parameters
    ----------
    level:
        The level to check.

    Returns
    -------
    list[ValidationIssue]
        Problems found, in field order. An empty list denotes success.
    """

    issues: List[ValidationIssue] = []
    c = level.constraints

    if not level.text.title.strip():
        issues.append(
            ValidationIssue(
                level_id=level.id,
                field="title",
                title="Title Required",
                message="Give the level a title so it can be listed in the briefing.",
            )
        )

    if c.min_dist <= 0:
        issues.append(
            ValidationIssue(
                level_id=level.id,
                field="min_dist",
                title="Distance Not Positive",
                message="Target distance must be greater than zero meters.",
            )
        )
    if c.min_dist > c.max_dist:
        issues.append(
            ValidationIssue(
                level_id=level.id,
                field="max_dist",
                title="Distance Range Inverted",
                message=f"min_dist ({c.min_dist}) must not exceed max_dist ({c.max_dist}).",
            )
        )

    if c.min_wind < 0:
        issues.append(
            ValidationIssue(
                level_id=level.id,
                field="min_wind",
                title="Negative Wind Speed",
                message="Wind speed bounds must be zero or more; direction carries the sign.",
            )
        )
    if c.min_wind > c.max_wind:
        issues.append(
            ValidationIssue(
                level_id=level.id,
                field="max_wind",
                title="Wind Range Inverted",
                message=f"min_wind ({c.min_wind}) must not exceed max_wind ({c.max_wind}).",
            )
        )

    if c.fixed_wind_dir is not None and not 0 <= c.fixed_wind_dir < 360:
        issues.append(
            ValidationIssue(
                level_id=level.id,
                field="fixed_wind_dir",
                title="Wind Direction Out of Range",
                message="Fixed wind direction must be between 0 and 360 degrees.",
            )
        )

    return issues


def validate_levels(levels: Iterable[LevelConfig]) -> List[ValidationIssue]:
    """Validate a level table, including id uniqueness."""

    issues: List[ValidationIssue] = []
    seen: Set[str] = set()
    for level in levels:
        if level.id in seen:
            issues.append(
                ValidationIssue(
                    level_id=level.id,
                    field="id",
                    title="Duplicate Level Id",
                    message=f"Level id '{level.id}' is used more than once.",
                )
            )
        seen.add(level.id)
        issues.extend(validate_level(level))
    return issues
