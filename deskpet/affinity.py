"""Persistent affinity score between the pet and its owner."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Callable, Optional

from deskpet.config import (
    AFFINITY_DEFAULT_VALUE,
    AFFINITY_MAX_VALUE,
    AFFINITY_MIN_VALUE,
)

log = logging.getLogger(__name__)

_KEY_VALUE = "val"
SAVE_DEBOUNCE_MS = 5000


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


def _clamp(value: int) -> int:
    return max(AFFINITY_MIN_VALUE, min(AFFINITY_MAX_VALUE, value))


class AffinityManager:
    """Tracks the affinity value, its recent reason, and saves it with debouncing."""

    def __init__(
        self,
        store_path: str | Path,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self._path = Path(store_path)
        self._clock = clock or _monotonic_ms
        self._value = AFFINITY_DEFAULT_VALUE
        self._recent = "First meet"
        self._last_save_ms = 0

    def begin(self) -> None:
        """Load the stored value, falling back to the default."""
        self._value = _clamp(self._load())
        self._recent = "Ready"
        log.info("Affinity loaded: %d", self._value)

    def add(self, delta: int, reason: Optional[str] = None) -> None:
        previous = self._value
        self._value = _clamp(self._value + delta)
        if reason:
            self._recent = reason
        if self._value != previous:
            now = self._clock()
            if now - self._last_save_ms >= SAVE_DEBOUNCE_MS:
                self._save()
                self._last_save_ms = now

    def reset(self) -> None:
        self._value = AFFINITY_DEFAULT_VALUE
        self._recent = "Reset"
        self._save()

    @property
    def value(self) -> int:
        return self._value

    @property
    def recent(self) -> str:
        return self._recent

    @property
    def level_name(self) -> str:
        if self._value < 25:
            return "Shy"
        if self._value < 50:
            return "Familiar"
        if self._value < 75:
            return "Close"
        return "Best Friend"

    @property
    def mood_name(self) -> str:
        if self._value < 25:
            return "Quiet"
        if self._value < 50:
            return "Warm"
        if self._value < 75:
            return "Happy"
        return "Lively"

    def _load(self) -> int:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            return int(data[_KEY_VALUE])
        except (OSError, ValueError, KeyError, TypeError):
            return AFFINITY_DEFAULT_VALUE

    def _save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps({_KEY_VALUE: self._value}), encoding="utf-8")