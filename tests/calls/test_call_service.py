from datetime import datetime

import pytest

from src.field_service.field_service.calls.model import ActiveCall, Contact
from src.field_service.field_service.calls.service import CallService, call_duration_label, filter_contacts
from src.field_service.field_service.core.enums import ActiveCallStatus
from src.field_service.field_service.core.exceptions import ValidationError


class FakeCallRepo:
    def __init__(self):
        self.holds = []

    def make_call(self, *, phone_number, contact_id=None):
        return ActiveCall(call_id="c1", phone_number=phone_number, status=ActiveCallStatus.CONNECTING, start_time=None)

    def toggle_hold(self, *, call_id, action):
        self.holds.append(action)
        return action == "hold"


def _call(**overrides) -> ActiveCall:
    data = dict(call_id="c1", phone_number="5551234567", status=ActiveCallStatus.ACTIVE,
                start_time=datetime(2025, 1, 6, 9, 0, 0))
    data.update(overrides)
    return ActiveCall(**data)


def test_blank_phone_number_is_rejected():
    with pytest.raises(ValidationError, match="Phone number required"):
        CallService(FakeCallRepo()).make_call("  ")


def test_toggle_hold_sends_action_and_updates_status():
    repo = FakeCallRepo()
    svc = CallService(repo)

    held = svc.toggle_hold(_call())
    resumed = svc.toggle_hold(held)

    assert repo.holds == ["hold", "resume"]
    assert held.is_on_hold and held.status == ActiveCallStatus.HOLD
    assert not resumed.is_on_hold and resumed.status == ActiveCallStatus.ACTIVE


def test_filter_contacts_matches_name_company_or_number():
    contacts = [
        Contact(contact_id="1", name="Ana Ruiz", phone_number="5550001111", company="Acme"),
        Contact(contact_id="2", name="Bo Chen", phone_number="5552223333"),
    ]

    assert [c.contact_id for c in filter_contacts(contacts, "acme")] == ["1"]
    assert [c.contact_id for c in filter_contacts(contacts, "222")] == ["2"]
    assert len(filter_contacts(contacts, "")) == 2


def test_duration_label_runs_from_start_time():
    assert call_duration_label(_call(), now=datetime(2025, 1, 6, 9, 1, 35)) == "1:35"
    assert call_duration_label(_call(start_time=None, duration=65)) == "1:05"


def test_active_call_survives_session_round_trip():
    call = _call(contact_name="Ana", is_muted=True)

    assert ActiveCall.from_session(call.to_session()) == call
    assert ActiveCall.from_session(None) is None
