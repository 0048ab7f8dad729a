from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from datetime import datetime
from typing import Optional

from ..core.enums import ActiveCallStatus, CallDirection, CallStatus


@dataclass(frozen=True)
class CallLog:
    call_id: str
    phone_number: str
    direction: CallDirection
    status: CallStatus
    duration: int
    timestamp: Optional[datetime]
    contact_name: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class Contact:
    contact_id: str
    name: str
    phone_number: str
    email: Optional[str] = None
    company: Optional[str] = None
    tags: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ActiveCall:
    call_id: str
    phone_number: str
    status: ActiveCallStatus
    start_time: Optional[datetime]
    duration: int = 0
    contact_name: Optional[str] = None
    is_muted: bool = False
    is_on_hold: bool = False

    def with_hold(self, on_hold: bool) -> "ActiveCall":
        return replace(
            self,
            is_on_hold=bool(on_hold),
            status=ActiveCallStatus.HOLD if on_hold else ActiveCallStatus.ACTIVE,
        )

    def with_mute(self, muted: bool) -> "ActiveCall":
        return replace(self, is_muted=bool(muted))

    def to_session(self) -> dict:
        data = asdict(self)
        data["status"] = self.status.value
        data["start_time"] = self.start_time.isoformat() if self.start_time else None
        return data

    @staticmethod
    def from_session(data: Optional[dict]) -> Optional["ActiveCall"]:
        if not data:
            return None
        start = data.get("start_time")
        return ActiveCall(
            call_id=str(data["call_id"]),
            phone_number=str(data.get("phone_number") or ""),
            status=ActiveCallStatus(data.get("status") or ActiveCallStatus.CONNECTING.value),
            start_time=datetime.fromisoformat(start) if start else None,
            duration=int(data.get("duration") or 0),
            contact_name=data.get("contact_name"),
            is_muted=bool(data.get("is_muted")),
            is_on_hold=bool(data.get("is_on_hold")),
        )
