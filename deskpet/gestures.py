"""Touch gesture recognition: taps, double taps, swipes and long presses."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Callable, Optional

from deskpet.config import (
    DOUBLE_TAP_WINDOW_MS,
    GESTURE_DEBUG_LOG,
    LONG_PRESS_THRESHOLD_MS,
    MOVE_THRESHOLD_PX,
    RELAXED_SWIPE_THRESHOLD_PX,
    SWIPE_THRESHOLD_PX,
    TAP_THRESHOLD_MS,
)

log = logging.getLogger(__name__)


class GestureType(Enum):
    NONE = auto()
    SINGLE_TAP = auto()
    DOUBLE_TAP = auto()
    RIGHT_SWIPE = auto()
    LEFT_SWIPE = auto()
    UP_SWIPE = auto()
    DOWN_SWIPE = auto()
    LONG_PRESS = auto()


@dataclass(frozen=True)
class TouchPoint:
    x: int = 0
    y: int = 0
    touched: bool = False


@dataclass(frozen=True)
class GestureEvent:
    type: GestureType = GestureType.NONE
    start_x: int = 0
    start_y: int = 0
    end_x: int = 0
    end_y: int = 0
    duration_ms: int = 0


class _TouchPhase(Enum):
    IDLE = auto()
    TOUCH_START = auto()
    TOUCH_MOVE = auto()
    TOUCH_END = auto()


GestureCallback = Callable[[GestureEvent], None]


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class GestureManager:
    """Feed touch samples with update(); recognised gestures go to the callback."""

    def __init__(
        self,
        callback: Optional[GestureCallback] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.callback = callback
        self._clock = clock or _monotonic_ms
        self._phase = _TouchPhase.IDLE
        self._start_point = TouchPoint()
        self._last_point = TouchPoint()
        self._touch_start_ms = 0
        self._touch_end_ms = 0
        self.reset()

    def reset(self) -> None:
        self._phase = _TouchPhase.IDLE
        self._pending_single_tap = False
        self._last_tap_ms = 0
        self._pending_tap_ms = 0
        self._pending_tap_event = GestureEvent()

    def update(self, point: TouchPoint) -> None:
        now = self._clock()

        if point.touched and self._phase is _TouchPhase.IDLE:
            self._phase = _TouchPhase.TOUCH_START
            self._start_point = point
            self._last_point = point
            self._touch_start_ms = now
        elif point.touched and self._phase is _TouchPhase.TOUCH_START:
            self._phase = _TouchPhase.TOUCH_MOVE
            self._last_point = point
        elif point.touched and self._phase is _TouchPhase.TOUCH_MOVE:
            self._last_point = point
        elif not point.touched and self._phase in (_TouchPhase.TOUCH_START, _TouchPhase.TOUCH_MOVE):
            self._phase = _TouchPhase.TOUCH_END
            self._touch_end_ms = now
            self._detect()
            self._phase = _TouchPhase.IDLE

        if self._pending_single_tap and now - self._pending_tap_ms > DOUBLE_TAP_WINDOW_MS:
            self._pending_single_tap = False
            self._emit(self._pending_tap_event)

    def _emit(self, event: GestureEvent) -> None:
        if GESTURE_DEBUG_LOG and event.type is not GestureType.NONE:
            log.debug(
                "Gesture %s start=(%d,%d) end=(%d,%d) dur=%dms",
                event.type.name, event.start_x, event.start_y,
                event.end_x, event.end_y, event.duration_ms,
            )
        if self.callback is not None:
            self.callback(event)

    def _emit_now(self, event: GestureEvent, gesture: GestureType) -> None:
        self._pending_single_tap = False
        self._emit(replace(event, type=gesture))

    def _detect(self) -> None:
        duration = self._touch_end_ms - self._touch_start_ms
        dx = self._last_point.x - self._start_point.x
        dy = self._last_point.y - self._start_point.y
        abs_dx, abs_dy = abs(dx), abs(dy)

        event = GestureEvent(
            start_x=self._start_point.x,
            start_y=self._start_point.y,
            end_x=self._last_point.x,
            end_y=self._last_point.y,
            duration_ms=duration,
        )

        if (duration >= LONG_PRESS_THRESHOLD_MS
                and abs_dx < SWIPE_THRESHOLD_PX and abs_dy < SWIPE_THRESHOLD_PX):
            self._emit_now(event, GestureType.LONG_PRESS)
            return

        if abs_dx >= RELAXED_SWIPE_THRESHOLD_PX and abs_dx >= abs_dy:
            self._emit_now(event, GestureType.RIGHT_SWIPE if dx > 0 else GestureType.LEFT_SWIPE)
            return

        if abs_dy >= RELAXED_SWIPE_THRESHOLD_PX and abs_dy > abs_dx:
            self._emit_now(event, GestureType.DOWN_SWIPE if dy > 0 else GestureType.UP_SWIPE)
            return

        if (duration < TAP_THRESHOLD_MS
                and abs_dx < MOVE_THRESHOLD_PX and abs_dy < MOVE_THRESHOLD_PX):
            now = self._touch_end_ms
            gap = now - self._last_tap_ms
            if 0 < gap < DOUBLE_TAP_WINDOW_MS:
                self._last_tap_ms = 0
                self._emit_now(event, GestureType.DOUBLE_TAP)
            else:
                self._pending_single_tap = True
                self._pending_tap_ms = now
                self._last_tap_ms = now
                self._pending_tap_event = replace(event, type=GestureType.SINGLE_TAP)