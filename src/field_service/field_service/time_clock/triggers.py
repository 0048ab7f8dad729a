from __future__ import annotations

from typing import Collection, Iterable, Mapping, Optional, Sequence

from ..common.validators import form_flag, optional_int, optional_text, require_choice, require_non_empty
from ..core.enums import Priority, TriggerEvent, TriggerFrequency
from ..core.exceptions import ValidationError
from .model import CurrentEntry, TimeClockTaskTrigger
from .repository import TaskTriggerRepository


def matching_triggers(
    triggers: Iterable[TimeClockTaskTrigger],
    event: TriggerEvent,
    fired_today_ids: Collection[int] = (),
) -> list[TimeClockTaskTrigger]:
    """Active triggers for ``event``; once-per-day triggers fire once."""

    out = []
    for t in triggers:
        if not t.is_active or t.trigger_event != event:
            continue
        if t.frequency == TriggerFrequency.ONCE_PER_DAY and t.trigger_id in fired_today_ids:
            continue
        out.append(t)
    return out


def upcoming_triggers(
    triggers: Iterable[TimeClockTaskTrigger],
    current: Optional[CurrentEntry],
) -> dict[TriggerEvent, list[TimeClockTaskTrigger]]:
    """Triggers the backend runs for each action available from ``current``."""

    if current is None:
        events = [TriggerEvent.CLOCK_IN]
    elif current.on_break:
        events = [TriggerEvent.BREAK_END, TriggerEvent.CLOCK_OUT]
    else:
        events = [TriggerEvent.BREAK_START, TriggerEvent.CLOCK_OUT]
    triggers = list(triggers)
    out = {}
    for event in events:
        matched = matching_triggers(triggers, event)
        if matched:
            out[event] = matched
    return out


def build_trigger_payload(form: Mapping[str, str]) -> dict:
    assign_to = optional_int(form.get("assign_to_user_id"), "Assignee")
    if assign_to is not None and assign_to <= 0:
        assign_to = None
    return {
        "name": require_non_empty(form.get("name"), "Name"),
        "triggerEvent": require_choice(form.get("trigger_event"), TriggerEvent, "Trigger event").value,
        "taskTitle": require_non_empty(form.get("task_title"), "Task title"),
        "taskDescription": optional_text(form.get("task_description")),
        "priority": require_choice(form.get("priority") or "medium", Priority, "Priority").value,
        "assignToUserId": assign_to,
        "frequency": require_choice(form.get("frequency") or "every_time", TriggerFrequency, "Frequency").value,
        "isActive": form_flag(form.get("is_active")),
    }


def _trigger_to_payload(t: TimeClockTaskTrigger) -> dict:
    return {
        "name": t.name,
        "triggerEvent": t.trigger_event.value,
        "taskTitle": t.task_title,
        "taskDescription": t.task_description,
        "priority": t.priority.value,
        "assignToUserId": t.assign_to_user_id,
        "frequency": t.frequency.value,
        "isActive": t.is_active,
    }


class TaskTriggerService:
    def __init__(self, triggers: TaskTriggerRepository):
        self._triggers = triggers

    def list_triggers(self) -> Sequence[TimeClockTaskTrigger]:
        return self._triggers.list_triggers()

    def create_trigger(self, form: Mapping[str, str]) -> None:
        self._triggers.create_trigger(payload=build_trigger_payload(form))

    def update_trigger(self, trigger_id: int, form: Mapping[str, str]) -> None:
        self._triggers.update_trigger(trigger_id=int(trigger_id), payload=build_trigger_payload(form))

    def delete_trigger(self, trigger_id: int) -> None:
        self._triggers.delete_trigger(trigger_id=int(trigger_id))

    def toggle_trigger(self, trigger_id: int) -> bool:
        current = next((t for t in self._triggers.list_triggers() if t.trigger_id == int(trigger_id)), None)
        if current is None:
            raise ValidationError("Trigger not found")
        payload = _trigger_to_payload(current)
        payload["isActive"] = not current.is_active
        self._triggers.update_trigger(trigger_id=current.trigger_id, payload=payload)
        return payload["isActive"]
