from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from ..api.http_repository import HttpRepository, as_decimal, as_int
from ..core.constants import FUEL_POLL_SECONDS
from .model import VehicleFuelUsage
from .repository import FuelRepository

FUEL_TODAY_KEY = "/api/fuel/today"


def _row_to_usage(r: dict) -> VehicleFuelUsage:
    return VehicleFuelUsage(
        vehicle_id=int(r["vehicleId"]),
        vehicle_number=str(r.get("vehicleNumber") or ""),
        fuel_economy_mpg=as_decimal(r.get("fuelEconomyMpg")) or Decimal("0"),
        trip_count=as_int(r.get("tripCount")) or 0,
        total_miles=as_decimal(r.get("totalMiles")) or Decimal("0"),
        estimated_gallons=as_decimal(r.get("estimatedGallons")) or Decimal("0"),
        estimated_cost=as_decimal(r.get("estimatedCost")) or Decimal("0"),
    )


class HttpFuelRepository(HttpRepository, FuelRepository):
    def list_today(self) -> Sequence[VehicleFuelUsage]:
        rows = self._query_list(FUEL_TODAY_KEY, refetch_interval=FUEL_POLL_SECONDS)
        return [_row_to_usage(r) for r in rows]
