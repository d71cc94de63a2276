import json

from deskpet.affinity import AffinityManager
from deskpet.config import AFFINITY_DEFAULT_VALUE, AFFINITY_MAX_VALUE, AFFINITY_MIN_VALUE


class FakeClock:
    def __init__(self, now=10_000):
        self.now = now

    def __call__(self):
        return self.now


def make(tmp_path, clock=None):
    return AffinityManager(tmp_path / "affinity.json", clock or FakeClock())


def test_initial_recent_before_begin(tmp_path):
    manager = make(tmp_path)
    assert manager.recent == "First meet"
    assert manager.value == AFFINITY_DEFAULT_VALUE


def test_begin_without_store_uses_default(tmp_path):
    manager = make(tmp_path)
    manager.begin()
    assert manager.value == AFFINITY_DEFAULT_VALUE
    assert manager.recent == "Ready"


def test_begin_clamps_stored_value(tmp_path):
    (tmp_path / "affinity.json").write_text(json.dumps({"val": 500}))
    manager = make(tmp_path)
    manager.begin()
    assert manager.value == AFFINITY_MAX_VALUE


def test_add_clamps_both_ends(tmp_path):
    manager = make(tmp_path)
    manager.begin()
    manager.add(1000, "pet")
    assert manager.value == AFFINITY_MAX_VALUE
    manager.add(-1000, "ignored")
    assert manager.value == AFFINITY_MIN_VALUE


def test_empty_reason_keeps_recent(tmp_path):
    manager = make(tmp_path)
    manager.begin()
    manager.add(1, "Patted")
    manager.add(1, "")
    manager.add(1, None)
    assert manager.recent == "Patted"


def test_save_is_debounced(tmp_path):
    clock = FakeClock()
    manager = make(tmp_path, clock)
    manager.begin()
    manager.add(5, "a")
    saved_after_first = manager.value
    clock.now += 1000
    manager.add(5, "b")
    reloaded = make(tmp_path)
    reloaded.begin()
    assert reloaded.value == saved_after_first
    assert manager.value == saved_after_first + 5


def test_save_after_debounce_window(tmp_path):
    clock = FakeClock()
    manager = make(tmp_path, clock)
    manager.begin()
    manager.add(5, "a")
    clock.now += 5000
    manager.add(5, "b")
    reloaded = make(tmp_path)
    reloaded.begin()
    assert reloaded.value == manager.value


def test_reset_saves_default(tmp_path):
    manager = make(tmp_path)
    manager.begin()
    manager.add(40, "x")
    manager.reset()
    assert manager.recent == "Reset"
    reloaded = make(tmp_path)
    reloaded.begin()
    assert reloaded.value == AFFINITY_DEFAULT_VALUE


def test_level_and_mood_names(tmp_path):
    manager = make(tmp_path)
    manager.begin()
    manager.add(-1000, None)
    assert (manager.level_name, manager.mood_name) == ("Shy", "Quiet")
    manager.add(25, None)
    assert (manager.level_name, manager.mood_name) == ("Familiar", "Warm")
    manager.add(25, None)
    assert (manager.level_name, manager.mood_name) == ("Close", "Happy")
    manager.add(25, None)
    assert (manager.level_name, manager.mood_name) == ("Best Friend", "Lively")


def test_corrupt_store_falls_back_to_default(tmp_path):
    (tmp_path / "affinity.json").write_text("not json")
    manager = make(tmp_path)
    manager.begin()
    assert manager.value == AFFINITY_DEFAULT_VALUE