from __future__ import annotations

from typing import Protocol, Sequence

from .model import VehicleFuelUsage


class FuelRepository(Protocol):
    def list_today(self) -> Sequence[VehicleFuelUsage]:
        raise NotImplementedError
