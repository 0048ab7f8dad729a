from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class VehicleFuelUsage:
    vehicle_id: int
    vehicle_number: str
    fuel_economy_mpg: Decimal
    trip_count: int
    total_miles: Decimal
    estimated_gallons: Decimal
    estimated_cost: Decimal


@dataclass(frozen=True)
class FuelTotals:
    miles: Decimal
    gallons: Decimal
    cost: Decimal
    trips: int
