from datetime import datetime

import pytest

from src.field_service.field_service.core.enums import ClockStatus
from src.field_service.field_service.core.exceptions import ValidationError
from src.field_service.field_service.time_clock.model import CurrentEntry
from src.field_service.field_service.time_clock.service import TimeClockService, elapsed, status_label


class InMemoryTimeClock:
    def __init__(self, current=None):
        self.current = current
        self.actions = []

    def get_current(self):
        return self.current

    def list_entries(self):
        return []

    def clock_in(self, *, location=""):
        self.actions.append(("clock_in", location))

    def clock_out(self, *, notes=""):
        self.actions.append(("clock_out", notes))

    def start_break(self):
        self.actions.append(("start_break",))

    def end_break(self):
        self.actions.append(("end_break",))


def _current(status=ClockStatus.CLOCKED_IN):
    return CurrentEntry(entry_id=1, clock_in_time=datetime(2025, 1, 6, 8, 0), status=status)


def test_clock_in_sends_empty_location():
    repo = InMemoryTimeClock()
    TimeClockService(repo).clock_in()

    assert repo.actions == [("clock_in", "")]


def test_cannot_clock_in_twice():
    with pytest.raises(ValidationError, match="already clocked in"):
        TimeClockService(InMemoryTimeClock(_current())).clock_in()


def test_clock_out_requires_open_entry_and_trims_notes():
    with pytest.raises(ValidationError, match="not clocked in"):
        TimeClockService(InMemoryTimeClock()).clock_out()

    repo = InMemoryTimeClock(_current())
    TimeClockService(repo).clock_out("  done  ")
    assert repo.actions == [("clock_out", "done")]


def test_break_guards():
    with pytest.raises(ValidationError, match="already on break"):
        TimeClockService(InMemoryTimeClock(_current(ClockStatus.ON_BREAK))).start_break()
    with pytest.raises(ValidationError, match="not on break"):
        TimeClockService(InMemoryTimeClock(_current())).end_break()

    repo = InMemoryTimeClock(_current(ClockStatus.ON_BREAK))
    TimeClockService(repo).end_break()
    assert repo.actions == [("end_break",)]


def test_labels_and_elapsed():
    assert status_label(ClockStatus.ON_BREAK) == "On Break"
    assert elapsed(None) == "0:00"
    assert elapsed(_current(), now=datetime(2025, 1, 6, 9, 5, 9)) == "1:05:09"
