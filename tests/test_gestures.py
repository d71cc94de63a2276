import pytest

from deskpet.config import DOUBLE_TAP_WINDOW_MS, LONG_PRESS_THRESHOLD_MS
from deskpet.gestures import GestureManager, GestureType, TouchPoint


class FakeClock:
    def __init__(self, now=10_000):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def rig():
    clock = FakeClock()
    events = []
    manager = GestureManager(events.append, clock)
    return manager, clock, events


def touch(manager, clock, at, x, y, touched=True):
    clock.now = at
    manager.update(TouchPoint(x, y, touched))


def tap(manager, clock, start, x=100, y=100):
    touch(manager, clock, start, x, y)
    touch(manager, clock, start + 50, x, y, touched=False)


def test_single_tap_emitted_after_window(rig):
    manager, clock, events = rig
    tap(manager, clock, 10_000)
    assert events == []
    touch(manager, clock, 10_050 + DOUBLE_TAP_WINDOW_MS + 1, 0, 0, touched=False)
    assert [e.type for e in events] == [GestureType.SINGLE_TAP]
    assert (events[0].start_x, events[0].start_y) == (100, 100)


def test_double_tap_suppresses_single(rig):
    manager, clock, events = rig
    tap(manager, clock, 10_000)
    tap(manager, clock, 10_150)
    touch(manager, clock, 11_000, 0, 0, touched=False)
    assert [e.type for e in events] == [GestureType.DOUBLE_TAP]


@pytest.mark.parametrize(
    "end, expected",
    [
        ((200, 110), GestureType.RIGHT_SWIPE),
        ((20, 90), GestureType.LEFT_SWIPE),
        ((110, 200), GestureType.DOWN_SWIPE),
        ((90, 20), GestureType.UP_SWIPE),
    ],
)
def test_swipes(rig, end, expected):
    manager, clock, events = rig
    touch(manager, clock, 10_000, 100, 100)
    touch(manager, clock, 10_050, *end)
    touch(manager, clock, 10_100, 0, 0, touched=False)
    assert [e.type for e in events] == [expected]
    assert (events[0].end_x, events[0].end_y) == end


def test_long_press(rig):
    manager, clock, events = rig
    touch(manager, clock, 10_000, 50, 50)
    touch(manager, clock, 10_400, 52, 51)
    touch(manager, clock, 10_000 + LONG_PRESS_THRESHOLD_MS, 0, 0, touched=False)
    assert [e.type for e in events] == [GestureType.LONG_PRESS]
    assert events[0].duration_ms == LONG_PRESS_THRESHOLD_MS


def test_medium_hold_without_movement_is_ignored(rig):
    manager, clock, events = rig
    touch(manager, clock, 10_000, 50, 50)
    touch(manager, clock, 10_400, 50, 50, touched=False)
    touch(manager, clock, 12_000, 0, 0, touched=False)
    assert events == []


def test_reset_drops_pending_tap(rig):
    manager, clock, events = rig
    tap(manager, clock, 10_000)
    manager.reset()
    touch(manager, clock, 11_000, 0, 0, touched=False)
    assert events == []


def test_swipe_cancels_pending_tap(rig):
    manager, clock, events = rig
    tap(manager, clock, 10_000)
    touch(manager, clock, 10_100, 100, 100)
    touch(manager, clock, 10_120, 200, 100)
    touch(manager, clock, 10_140, 0, 0, touched=False)
    touch(manager, clock, 11_000, 0, 0, touched=False)
    assert [e.type for e in events] == [GestureType.RIGHT_SWIPE]


def test_no_callback_does_not_break_detection():
    clock = FakeClock()
    manager = GestureManager(None, clock)
    tap(manager, clock, 10_000)
    received = []
    manager.callback = received.append
    touch(manager, clock, 11_000, 0, 0, touched=False)
    assert [e.type for e in received] == [GestureType.SINGLE_TAP]