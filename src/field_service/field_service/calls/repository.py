from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ActiveCall, CallLog, Contact


class CallRepository(Protocol):
    def list_logs(self) -> Sequence[CallLog]:
        raise NotImplementedError

    def list_contacts(self) -> Sequence[Contact]:
        raise NotImplementedError

    def list_active_calls(self) -> Sequence[ActiveCall]:
        raise NotImplementedError

    def make_call(self, *, phone_number: str, contact_id: Optional[str] = None) -> ActiveCall:
        raise NotImplementedError

    def end_call(self, *, call_id: str) -> None:
        raise NotImplementedError

    def toggle_hold(self, *, call_id: str, action: str) -> bool:
        """Return the new on-hold flag reported by the backend."""

        raise NotImplementedError

    def toggle_mute(self, *, call_id: str, action: str) -> bool:
        """Return the new muted flag reported by the backend."""

        raise NotImplementedError
