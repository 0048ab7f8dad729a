from __future__ import annotations

from typing import Optional, Sequence

from ..api.http_repository import HttpRepository, as_bool, as_enum
from ..common.datetime_utils import parse_iso_datetime
from ..core.constants import ACTIVE_CALLS_POLL_SECONDS
from ..core.enums import ActiveCallStatus, CallDirection, CallStatus
from ..core.exceptions import ApiError
from .model import ActiveCall, CallLog, Contact
from .repository import CallRepository

LOGS_KEY = "/api/call-manager/logs"
CONTACTS_KEY = "/api/call-manager/contacts"
ACTIVE_CALLS_KEY = "/api/call-manager/active-calls"


def _row_to_log(r: dict) -> CallLog:
    return CallLog(
        call_id=str(r["id"]),
        phone_number=str(r.get("phoneNumber") or ""),
        direction=as_enum(CallDirection, r.get("direction"), CallDirection.OUTBOUND),
        status=as_enum(CallStatus, r.get("status"), CallStatus.COMPLETED),
        duration=int(r.get("duration") or 0),
        timestamp=parse_iso_datetime(r.get("timestamp")),
        contact_name=r.get("contactName"),
        notes=r.get("notes"),
    )


def _row_to_contact(r: dict) -> Contact:
    return Contact(
        contact_id=str(r["id"]),
        name=str(r.get("name") or ""),
        phone_number=str(r.get("phoneNumber") or ""),
        email=r.get("email"),
        company=r.get("company"),
        tags=tuple(r.get("tags") or ()),
    )


def _row_to_active_call(r: dict) -> ActiveCall:
    return ActiveCall(
        call_id=str(r["id"]),
        phone_number=str(r.get("phoneNumber") or ""),
        status=as_enum(ActiveCallStatus, r.get("status"), ActiveCallStatus.CONNECTING),
        start_time=parse_iso_datetime(r.get("startTime")),
        duration=int(r.get("duration") or 0),
        contact_name=r.get("contactName"),
        is_muted=as_bool(r.get("isMuted")),
        is_on_hold=as_bool(r.get("isOnHold")),
    )


def _list_rows(data) -> list:
    # Some backend builds answer with {"error": ...} instead of a list when the
    # telephony provider is not configured.
    return data if isinstance(data, list) else []


class HttpCallRepository(HttpRepository, CallRepository):
    def list_logs(self) -> Sequence[CallLog]:
        return [_row_to_log(r) for r in _list_rows(self._query(LOGS_KEY))]

    def list_contacts(self) -> Sequence[Contact]:
        return [_row_to_contact(r) for r in _list_rows(self._query(CONTACTS_KEY))]

    def list_active_calls(self) -> Sequence[ActiveCall]:
        data = self._query(ACTIVE_CALLS_KEY, refetch_interval=ACTIVE_CALLS_POLL_SECONDS)
        return [_row_to_active_call(r) for r in _list_rows(data)]

    def make_call(self, *, phone_number: str, contact_id: Optional[str] = None) -> ActiveCall:
        body = {"phoneNumber": phone_number}
        if contact_id:
            body["contactId"] = contact_id
        data = self._mutate("POST", "/api/call-manager/make-call", body, invalidate=[(ACTIVE_CALLS_KEY,)])
        call = (data or {}).get("call") if isinstance(data, dict) else None
        if not call:
            raise ApiError("Unable to initiate call. Please try again.", path="/api/call-manager/make-call")
        return _row_to_active_call(call)

    def end_call(self, *, call_id: str) -> None:
        self._mutate(
            "POST",
            f"/api/call-manager/end-call/{call_id}",
            invalidate=[(LOGS_KEY,), (ACTIVE_CALLS_KEY,)],
        )

    def toggle_hold(self, *, call_id: str, action: str) -> bool:
        data = self._mutate("POST", "/api/call-manager/toggle-hold", {"callId": call_id, "action": action})
        return as_bool((data or {}).get("isOnHold"))

    def toggle_mute(self, *, call_id: str, action: str) -> bool:
        data = self._mutate("POST", "/api/call-manager/toggle-mute", {"callId": call_id, "action": action})
        return as_bool((data or {}).get("isMuted"))
