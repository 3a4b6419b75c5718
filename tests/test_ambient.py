import json
from datetime import date

import pytest

from orbit.client import events
from orbit.client.ambient import AmbientState, DEFAULT_ENERGY
from orbit.client.events import EventBus


@pytest.fixture
def state_file(tmp_path):
    return tmp_path / "ambient.json"


def test_defaults():
    state = AmbientState()
    assert state.snapshot() == {"mode": "build", "mood": "neutral", "energy": DEFAULT_ENERGY}


def test_mutations_are_persisted(state_file):
    state = AmbientState(state_file).load()
    state.set_mode("restore")
    state.set_mood("tired")
    state.set_energy(25)

    saved = json.loads(state_file.read_text())
    assert saved["mode"] == "restore"
    assert saved["mood"] == "tired"
    assert saved["energy"] == 25

    reloaded = AmbientState(state_file).load()
    assert reloaded.snapshot() == {"mode": "restore", "mood": "tired", "energy": 25}


def test_load_only_once(state_file):
    state_file.write_text(json.dumps({"mode": "flow"}))
    state = AmbientState(state_file).load()
    state_file.write_text(json.dumps({"mode": "restore"}))

    state.load()
    assert state.mode == "flow"


def test_corrupt_file_keeps_defaults(state_file):
    state_file.write_text("{not json")
    state = AmbientState(state_file).load()
    assert state.mode == "build"


def test_invalid_stored_values_ignored(state_file):
    state_file.write_text(json.dumps({"mode": "recover", "mood": "ecstatic", "energy": 250}))
    state = AmbientState(state_file).load()
    assert state.mode == "build"
    assert state.mood == "neutral"
    assert state.energy == 100


def test_energy_is_clamped():
    state = AmbientState()
    state.set_energy(-10)
    assert state.energy == 0
    state.set_energy(140)
    assert state.energy == 100


def test_invalid_mode_rejected():
    with pytest.raises(ValueError):
        AmbientState().set_mode("recover")


def test_events_only_on_change():
    bus = EventBus()
    received = []
    bus.subscribe(events.MODE_CHANGED, received.append)

    state = AmbientState(bus=bus)
    state.set_mode("build")
    state.set_mode("flow")
    state.set_mode("flow")

    assert received == [{"previous": "build", "mode": "flow"}]


def test_energy_event_payload():
    state = AmbientState()
    received = []
    state.subscribe(events.ENERGY_CHANGED, received.append)

    state.set_energy(20)
    assert received == [{"previous": DEFAULT_ENERGY, "energy": 20}]


def test_focus_streak(state_file):
    state = AmbientState(state_file)
    state.mark_focus_day(date(2024, 5, 10))
    state.mark_focus_day(date(2024, 5, 9))
    state.mark_focus_day(date(2024, 5, 9))
    state.mark_focus_day(date(2024, 5, 6))

    assert state.focus_streak(date(2024, 5, 10)) == [False, False, True, False, False, True, True]
    assert AmbientState(state_file).load().focus_streak(date(2024, 5, 10))[-1] is True


class RecordingLock:
    """Verrou qui compte ses acquisitions"""

    def __init__(self):
        self.entered = 0

    def __enter__(self):
        self.entered += 1
        return self

    def __exit__(self, *exc):
        return False


def test_focus_streak_reads_under_lock(state_file):
    state = AmbientState(state_file)
    state.mark_focus_day(date(2024, 5, 10))
    state._lock = RecordingLock()

    assert state.focus_streak(date(2024, 5, 10))[-1] is True
    assert state._lock.entered == 1
