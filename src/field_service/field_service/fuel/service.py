from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Sequence

from .model import FuelTotals, VehicleFuelUsage
from .repository import FuelRepository


def fuel_totals(rows: Iterable[VehicleFuelUsage]) -> FuelTotals:
    miles = gallons = cost = Decimal("0")
    trips = 0
    for r in rows:
        miles += r.total_miles
        gallons += r.estimated_gallons
        cost += r.estimated_cost
        trips += r.trip_count
    return FuelTotals(miles=miles, gallons=gallons, cost=cost, trips=trips)


class FuelService:
    def __init__(self, fuel: FuelRepository):
        self._fuel = fuel

    def today(self) -> Sequence[VehicleFuelUsage]:
        return self._fuel.list_today()
