"""Session state machine for a training or campaign run.

``SessionState`` is immutable. Each transition is a plain function taking
the current state (plus the event's arguments) and returning the next
state; a transition that does not apply in the current status returns the
same object unchanged. ``TrainingSession`` holds the live state together
with the random source and clock, and logs every transition.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, List, Optional, Tuple

from ballistics import (
    Environment,
    ImpactPoint,
    RangeTableEntry,
    TURRET_STEP,
    TurretState,
    build_range_table,
    calculate_impact,
)
from feedback import analyze_shot
from levels import GameMode, LevelConfig, generate_level_environment, levels_for
from logger import LogCategory, LoggableMixin
from scoring import ShotResult, is_expert_mode, score_shot, update_mastery


class GameStatus(Enum):
    """Screens of the trainer."""

    MENU = "MENU"
    BRIEFING = "BRIEFING"
    AIMING = "AIMING"
    RESULT = "RESULT"


Clock = Callable[[], float]


@dataclass(frozen=True)
class SessionState:
    """Everything that changes while playing."""

    status: GameStatus = GameStatus.MENU
    mode: Optional[GameMode] = None
    level_index: int = 0
    environment: Environment = field(default_factory=Environment)
    turrets: TurretState = field(default_factory=TurretState)
    last_shot: Optional[ShotResult] = None
    feedback: Tuple[str, ...] = ()
    mastery: int = 0

    @property
    def expert_mode(self) -> bool:
        return is_expert_mode(self.mastery)

    @property
    def show_impact_predictor(self) -> bool:
        """Training runs show the predicted impact in the scope."""
        return self.mode is GameMode.TRAINING


def current_level(state: SessionState) -> LevelConfig:
    levels = levels_for(state.mode or GameMode.CAMPAIGN)
    if 0 <= state.level_index < len(levels):
        return levels[state.level_index]
    return levels[0]


def has_next_level(state: SessionState) -> bool:
    if state.mode is None:
        return False
    return state.level_index + 1 < len(levels_for(state.mode))


def preview_impact(state: SessionState) -> ImpactPoint:
    """Live impact prediction for the dialed turrets."""
    return calculate_impact(state.environment, state.turrets)


def range_table(state: SessionState) -> List[RangeTableEntry]:
    return build_range_table(state.environment.temperature)


def start_briefing(state: SessionState, mode: GameMode, level_index: int,
                   rng: Optional[random.Random] = None) -> SessionState:
    """Enter the briefing for a level with a fresh environment and zeroed turrets."""
    levels = levels_for(mode)
    if not 0 <= level_index < len(levels):
        return state
    return replace(
        state,
        status=GameStatus.BRIEFING,
        mode=mode,
        level_index=level_index,
        environment=generate_level_environment(levels[level_index], rng),
        turrets=TurretState(),
        last_shot=None,
        feedback=(),
    )


def start_aiming(state: SessionState) -> SessionState:
    if state.status is not GameStatus.BRIEFING:
        return state
    return replace(state, status=GameStatus.AIMING)


def fire(state: SessionState, clock: Clock = time.time) -> SessionState:
    """Resolve a shot: impact, score, mastery and feedback."""
    if state.status is not GameStatus.AIMING:
        return state
    impact = preview_impact(state)
    result = score_shot(impact, timestamp=int(clock() * 1000))
    return replace(
        state,
        status=GameStatus.RESULT,
        last_shot=result,
        feedback=tuple(analyze_shot(result, state.environment)),
        mastery=update_mastery(state.mastery, result),
    )


def retry(state: SessionState) -> SessionState:
    """Back to aiming on the same environment, keeping the dialed turrets."""
    if state.status is not GameStatus.RESULT:
        return state
    return replace(state, status=GameStatus.AIMING, last_shot=None, feedback=())


def next_level(state: SessionState, rng: Optional[random.Random] = None) -> SessionState:
    if state.status is not GameStatus.RESULT or state.last_shot is None:
        return state
    if not state.last_shot.hit or not has_next_level(state):
        return state
    return start_briefing(state, state.mode, state.level_index + 1, rng)


def prev_level(state: SessionState, rng: Optional[random.Random] = None) -> SessionState:
    if state.status is not GameStatus.BRIEFING or state.level_index <= 0:
        return state
    return start_briefing(state, state.mode, state.level_index - 1, rng)


def return_to_menu(state: SessionState) -> SessionState:
    return replace(
        state,
        status=GameStatus.MENU,
        mode=None,
        last_shot=None,
        feedback=(),
        mastery=0,
    )


def adjust_turret(state: SessionState, axis: str, delta: float) -> SessionState:
    """Move a turret while the controls are on screen (aiming or result)."""
    if state.status not in (GameStatus.AIMING, GameStatus.RESULT):
        return state
    return replace(state, turrets=state.turrets.adjusted(axis, delta))


def reset_turrets(state: SessionState) -> SessionState:
    if state.status not in (GameStatus.AIMING, GameStatus.RESULT):
        return state
    return replace(state, turrets=TurretState())


class TrainingSession(LoggableMixin):
    """Owns the live :class:`SessionState` and applies transitions to it."""

    def __init__(self, rng: Optional[random.Random] = None, clock: Clock = time.time,
                 state: Optional[SessionState] = None):
        super().__init__()
        self.rng = rng or random.Random()
        self.clock = clock
        self.state = state or SessionState()

    def _apply(self, event: str, new_state: SessionState) -> bool:
        if new_state is self.state:
            self.log_debug(f"Ignored '{event}' in {self.state.status.value}",
                           category=LogCategory.SESSION)
            return False
        previous = self.state.status
        self.state = new_state
        self.log_info(f"{event}: {previous.value} -> {new_state.status.value}",
                      category=LogCategory.SESSION,
                      mode=new_state.mode.value if new_state.mode else None,
                      level_index=new_state.level_index)
        return True

    def _log_environment(self):
        env = self.state.environment
        self._logger.log_environment(env.distance, env.wind_speed, env.wind_direction,
                                     env.temperature, env.humidity,
                                     level_id=current_level(self.state).id)

    def start_briefing(self, mode: GameMode, level_index: int = 0) -> bool:
        changed = self._apply("start_briefing",
                              start_briefing(self.state, mode, level_index, self.rng))
        if changed:
            self._log_environment()
        return changed

    def start_aiming(self) -> bool:
        return self._apply("start_aiming", start_aiming(self.state))

    def fire(self) -> Optional[Tuple[ShotResult, int]]:
        """Fire the shot; ``None`` when not aiming."""
        if not self._apply("fire", fire(self.state, self.clock)):
            return None
        result = self.state.last_shot
        self._logger.log_ballistics_calculation(
            "impact",
            {"environment": self.state.environment.to_dict(),
             "elevation": self.state.turrets.elevation,
             "windage": self.state.turrets.windage},
            {"x": result.wind_error, "y": result.drop_error,
             "hit": result.hit, "rings": result.rings},
        )
        self.log_info(f"Shot scored {result.rings} rings, mastery {self.state.mastery}",
                      category=LogCategory.SCORING, hit=result.hit,
                      expert_mode=self.state.expert_mode)
        return result, self.state.mastery

    def retry(self) -> bool:
        return self._apply("retry", retry(self.state))

    def next_level(self) -> bool:
        changed = self._apply("next_level", next_level(self.state, self.rng))
        if changed:
            self._log_environment()
        return changed

    def prev_level(self) -> bool:
        changed = self._apply("prev_level", prev_level(self.state, self.rng))
        if changed:
            self._log_environment()
        return changed

    def return_to_menu(self) -> bool:
        return self._apply("return_to_menu", return_to_menu(self.state))

    def adjust_turret(self, axis: str, delta: float) -> bool:
        new_state = adjust_turret(self.state, axis, delta)
        if new_state is self.state:
            return False
        self.state = new_state
        self.log_trace(f"{axis} -> {getattr(new_state.turrets, axis):.1f} MIL",
                       category=LogCategory.USER_ACTION)
        return True

    def dial_elevation(self, clicks: int = 1) -> bool:
        return self.adjust_turret("elevation", clicks * TURRET_STEP)

    def dial_windage(self, clicks: int = 1) -> bool:
        return self.adjust_turret("windage", clicks * TURRET_STEP)

    def reset_turrets(self) -> bool:
        return self._apply("reset_turrets", reset_turrets(self.state))

    def preview_impact(self) -> ImpactPoint:
        return preview_impact(self.state)

    def range_table(self) -> List[RangeTableEntry]:
        return range_table(self.state)

    @property
    def level(self) -> LevelConfig:
        return current_level(self.state)

    @property
    def feedback(self) -> List[str]:
        return list(self.state.feedback)
