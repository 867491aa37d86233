"""Press-and-hold turret adjustment driven by Qt timers."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from ballistics import TURRET_STEP
from logger import LogCategory, get_logger


REPEAT_DELAY_MS = 400
REPEAT_INTERVAL_MS = 75


class TurretRepeater(QObject):
    """Apply one step on press, then keep stepping while held.

    After ``delay_ms`` the step repeats every ``interval_ms`` until
    :meth:`release` is called.
    """

    stepped = Signal()

    def __init__(self, apply_step: Callable[[], object], delay_ms: int = REPEAT_DELAY_MS,
                 interval_ms: int = REPEAT_INTERVAL_MS, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.logger = get_logger()
        self._apply_step = apply_step

        self._delay_timer = QTimer(self)
        self._delay_timer.setSingleShot(True)
        self._delay_timer.setInterval(delay_ms)
        self._delay_timer.timeout.connect(self._begin_repeat)

        self._repeat_timer = QTimer(self)
        self._repeat_timer.setInterval(interval_ms)
        self._repeat_timer.timeout.connect(self._step)

    @classmethod
    def for_session(cls, session, axis: str, direction: int = 1,
                    parent: Optional[QObject] = None) -> "TurretRepeater":
        """Repeater that dials ``axis`` of a :class:`session.TrainingSession`."""
        delta = TURRET_STEP if direction >= 0 else -TURRET_STEP
        return cls(lambda: session.adjust_turret(axis, delta), parent=parent)

    @property
    def is_active(self) -> bool:
        return self._delay_timer.isActive() or self._repeat_timer.isActive()

    def press(self) -> None:
        self.release()
        self._step()
        self._delay_timer.start()

    def release(self) -> None:
        if self.is_active:
            self.logger.trace("Turret repeat stopped", category=LogCategory.USER_ACTION)
        self._delay_timer.stop()
        self._repeat_timer.stop()

    def _begin_repeat(self) -> None:
        self._repeat_timer.start()

    def _step(self) -> None:
        self._apply_step()
        self.stepped.emit()
