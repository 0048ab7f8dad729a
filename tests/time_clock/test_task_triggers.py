from datetime import datetime

import pytest

from src.field_service.field_service.core.enums import ClockStatus, Priority, TriggerEvent, TriggerFrequency
from src.field_service.field_service.core.exceptions import ValidationError
from src.field_service.field_service.time_clock.model import CurrentEntry, TimeClockTaskTrigger
from src.field_service.field_service.time_clock.triggers import (
    TaskTriggerService,
    build_trigger_payload,
    matching_triggers,
    upcoming_triggers,
)


def _trigger(trigger_id, event=TriggerEvent.CLOCK_IN, frequency=TriggerFrequency.EVERY_TIME, active=True):
    return TimeClockTaskTrigger(
        trigger_id=trigger_id,
        name=f"t{trigger_id}",
        trigger_event=event,
        task_title=f"Task {trigger_id}",
        task_description=None,
        priority=Priority.MEDIUM,
        assign_to_user_id=None,
        frequency=frequency,
        is_active=active,
    )


class InMemoryTriggers:
    def __init__(self, triggers):
        self.triggers = list(triggers)
        self.updates = []

    def list_triggers(self):
        return self.triggers

    def update_trigger(self, *, trigger_id, payload):
        self.updates.append((trigger_id, payload))


def test_matching_skips_inactive_other_events_and_fired_daily():
    triggers = [
        _trigger(1),
        _trigger(2, active=False),
        _trigger(3, event=TriggerEvent.CLOCK_OUT),
        _trigger(4, frequency=TriggerFrequency.ONCE_PER_DAY),
        _trigger(5, frequency=TriggerFrequency.ONCE_PER_DAY),
    ]

    out = matching_triggers(triggers, TriggerEvent.CLOCK_IN, fired_today_ids={5})

    assert [t.trigger_id for t in out] == [1, 4]


def test_payload_defaults_and_required_fields():
    payload = build_trigger_payload({"name": "Safety", "trigger_event": "clock_in", "task_title": "Check van"})

    assert payload["priority"] == "medium"
    assert payload["frequency"] == "every_time"
    assert payload["isActive"] is False
    assert payload["assignToUserId"] is None

    with pytest.raises(ValidationError, match="Task title is required"):
        build_trigger_payload({"name": "Safety", "trigger_event": "clock_in"})


def test_toggle_flips_active_and_keeps_fields():
    repo = InMemoryTriggers([_trigger(7)])

    assert TaskTriggerService(repo).toggle_trigger(7) is False
    trigger_id, payload = repo.updates[0]
    assert trigger_id == 7
    assert payload["isActive"] is False
    assert payload["taskTitle"] == "Task 7"


def test_toggle_unknown_trigger():
    with pytest.raises(ValidationError, match="Trigger not found"):
        TaskTriggerService(InMemoryTriggers([])).toggle_trigger(1)


def test_upcoming_follows_available_actions():
    triggers = [
        _trigger(1),
        _trigger(2, event=TriggerEvent.CLOCK_OUT),
        _trigger(3, event=TriggerEvent.BREAK_END),
    ]
    on_break = CurrentEntry(entry_id=1, clock_in_time=datetime(2026, 1, 5, 8), status=ClockStatus.ON_BREAK)

    assert list(upcoming_triggers(triggers, None)) == [TriggerEvent.CLOCK_IN]
    out = upcoming_triggers(triggers, on_break)
    assert list(out) == [TriggerEvent.BREAK_END, TriggerEvent.CLOCK_OUT]
    assert [t.trigger_id for t in out[TriggerEvent.CLOCK_OUT]] == [2]
