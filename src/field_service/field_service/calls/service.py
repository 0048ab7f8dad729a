from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..common.formatting import format_call_duration, format_clock_duration
from ..core.exceptions import ValidationError
from .model import ActiveCall, CallLog, Contact
from .repository import CallRepository


def filter_contacts(contacts: Iterable[Contact], query: str) -> list[Contact]:
    q = (query or "").strip().lower()
    if not q:
        return list(contacts)
    out = []
    for c in contacts:
        if q in c.name.lower() or q in (c.company or "").lower() or q in c.phone_number:
            out.append(c)
    return out


def call_duration_label(call: ActiveCall, *, now=None) -> str:
    if call.start_time:
        return format_clock_duration(call.start_time, now=now)
    return format_call_duration(call.duration)


class CallService:
    def __init__(self, calls: CallRepository):
        self._calls = calls

    def list_logs(self) -> Sequence[CallLog]:
        return self._calls.list_logs()

    def list_contacts(self, query: str = "") -> list[Contact]:
        return filter_contacts(self._calls.list_contacts(), query)

    def list_active_calls(self) -> Sequence[ActiveCall]:
        return self._calls.list_active_calls()

    def make_call(self, phone_number: str, contact_id: Optional[str] = None) -> ActiveCall:
        phone = (phone_number or "").strip()
        if not phone:
            raise ValidationError("Phone number required")
        return self._calls.make_call(phone_number=phone, contact_id=(contact_id or "").strip() or None)

    def end_call(self, call: ActiveCall) -> None:
        self._calls.end_call(call_id=call.call_id)

    def toggle_hold(self, call: ActiveCall) -> ActiveCall:
        action = "resume" if call.is_on_hold else "hold"
        return call.with_hold(self._calls.toggle_hold(call_id=call.call_id, action=action))

    def toggle_mute(self, call: ActiveCall) -> ActiveCall:
        action = "unmute" if call.is_muted else "mute"
        return call.with_mute(self._calls.toggle_mute(call_id=call.call_id, action=action))
