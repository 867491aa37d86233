"""Instructor feedback for a fired shot.

The analysis works out, per axis, the exact turret correction that would
have centred the shot and explains it: direction and size of the miss, an
environmental cause where one is evident, the cm-to-MIL arithmetic and the
dial instruction. Sections are separated by :data:`SECTION_DIVIDER` so the
presentation layer can draw rules between them.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from ballistics import Environment, STANDARD_TEMP
from scoring import ShotResult


SECTION_DIVIDER = "---"
CORRECTION_THRESHOLD_MIL = 0.05
TEMPERATURE_ERROR_THRESHOLD_CM = 15.0
TEMPERATURE_DEVIATION_C = 10.0


@dataclass(frozen=True)
class AxisDiagnosis:
    """Explainable breakdown of the error on one axis."""

    axis: str  # "elevation" or "windage"
    error_cm: float
    cm_per_mil: float
    correction_mil: float
    direction: str  # HIGH / LOW / LEFT / RIGHT
    adjustment: str  # INCREASE / DECREASE / LEFT / RIGHT
    annotation: Optional[str] = None


def cm_per_mil(environment: Environment) -> float:
    return environment.distance / 10


def _temperature_annotation(error_cm: float, environment: Environment) -> Optional[str]:
    if abs(error_cm) <= TEMPERATURE_ERROR_THRESHOLD_CM:
        return None
    deviation = environment.temperature - STANDARD_TEMP
    if deviation > TEMPERATURE_DEVIATION_C and error_cm > 0:
        return (
            f"Env Analysis: Temp {environment.temperature:g}°C (Hot). Low air density "
            "reduced drag, causing less drop. Shot went high."
        )
    if deviation < -TEMPERATURE_DEVIATION_C and error_cm < 0:
        return (
            f"Env Analysis: Temp {environment.temperature:g}°C (Cold). High air density "
            "increased drag, causing more drop. Shot went low."
        )
    return None


def _wind_annotation(environment: Environment) -> Optional[str]:
    # No consistency check against the error direction, unlike temperature.
    if environment.wind_speed > 0:
        return (
            f"Env Analysis: Wind {environment.wind_speed:g}m/s @ "
            f"{environment.wind_direction:g}°. Wind pushed the bullet."
        )
    return None


def analyze_axes(result: ShotResult, environment: Environment) -> List[AxisDiagnosis]:
    """Return a diagnosis for each axis whose correction is worth dialing."""
    scale = cm_per_mil(environment)
    diagnoses: List[AxisDiagnosis] = []

    v_err = result.drop_error
    v_corr = -(v_err / scale)
    if abs(v_corr) > CORRECTION_THRESHOLD_MIL:
        diagnoses.append(AxisDiagnosis(
            axis="elevation",
            error_cm=v_err,
            cm_per_mil=scale,
            correction_mil=v_corr,
            direction="HIGH" if v_err > 0 else "LOW",
            adjustment="DECREASE" if v_err > 0 else "INCREASE",
            annotation=_temperature_annotation(v_err, environment),
        ))

    h_err = result.wind_error
    h_corr = -(h_err / scale)
    if abs(h_corr) > CORRECTION_THRESHOLD_MIL:
        diagnoses.append(AxisDiagnosis(
            axis="windage",
            error_cm=h_err,
            cm_per_mil=scale,
            correction_mil=h_corr,
            direction="RIGHT" if h_err > 0 else "LEFT",
            adjustment="LEFT" if h_err > 0 else "RIGHT",
            annotation=_wind_annotation(environment),
        ))

    return diagnoses


def _outcome_line(result: ShotResult) -> str:
    if result.rings == 10:
        return "Perfect Hit (10 Rings)! Your calculations were precise."
    if result.hit:
        return (
            f"Hit: {result.rings} Rings. You hit the target, "
            "but there is room for improvement."
        )
    return "Miss. Please review the data analysis below to correct your shot."


def _fixed(value: float, places: int) -> str:
    """Fixed-point text with ties rounded away from zero (0.25 -> "0.3")."""
    quantum = Decimal(1).scaleb(-places)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def _render_section(diagnosis: AxisDiagnosis) -> List[str]:
    err_abs = _fixed(abs(diagnosis.error_cm), 0)
    label = "Elevation Error" if diagnosis.axis == "elevation" else "Windage Error"
    lines = [SECTION_DIVIDER, f"[{label}] Impact was {err_abs}cm {diagnosis.direction}."]
    if diagnosis.annotation:
        lines.append(diagnosis.annotation)
    lines.append(
        f"Calc: {err_abs}cm / {diagnosis.cm_per_mil:g}cm = "
        f"{_fixed(abs(diagnosis.correction_mil), 2)} MIL"
    )
    dial = _fixed(abs(diagnosis.correction_mil), 1)
    if diagnosis.axis == "elevation":
        lines.append(f"Correction: {diagnosis.adjustment} Elevation by {dial} MIL.")
    else:
        lines.append(f"Correction: Adjust Windage {diagnosis.adjustment} by {dial} MIL.")
    return lines


def analyze_shot(result: ShotResult, environment: Environment) -> List[str]:
    """Instructor feedback lines for ``result``, in display order."""
    lines = [
        _outcome_line(result),
        f"Formula: At {environment.distance:g}m distance, 1 MIL = {cm_per_mil(environment):g}cm.",
    ]
    for diagnosis in analyze_axes(result, environment):
        lines.extend(_render_section(diagnosis))
    return lines


def is_divider(line: str) -> bool:
    return line == SECTION_DIVIDER
