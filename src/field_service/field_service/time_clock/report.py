from __future__ import annotations

import csv
import io
from dataclasses import asdict, dataclass
from datetime import date
from typing import Optional

from ..common.formatting import format_minutes_hhmm
from .calculator import StandardWorkedTimeCalculator, WorkedTimeCalculator
from .model import TimeClockReportRow
from .repository import TimeClockRepository

CSV_FIELDS = [
    "work_date",
    "clock_in",
    "clock_out",
    "break_minutes",
    "worked_hours",
    "status",
    "notes",
]


@dataclass(frozen=True)
class ReportData:
    rows: list[TimeClockReportRow]
    total_minutes: int

    @property
    def total_hours(self) -> str:
        return format_minutes_hhmm(self.total_minutes)


class TimeClockReportService:
    def __init__(
        self,
        entries: TimeClockRepository,
        *,
        calculator: Optional[WorkedTimeCalculator] = None,
    ):
        self._entries = entries
        self._calculator = calculator or StandardWorkedTimeCalculator()

    def build_report(self, *, start: date, end: date) -> ReportData:
        rows: list[TimeClockReportRow] = []
        total = 0
        dated = [e for e in self._entries.list_entries() if e.clock_in_time is not None]
        for e in sorted(dated, key=lambda x: x.clock_in_time):
            day = e.clock_in_time.date()
            if day < start or day > end:
                continue
            minutes = self._calculator.worked_minutes(e)
            total += minutes
            rows.append(
                TimeClockReportRow(
                    entry_id=e.entry_id,
                    work_date=day.strftime("%Y-%m-%d"),
                    clock_in=e.clock_in_time.strftime("%H:%M"),
                    clock_out=e.clock_out_time.strftime("%H:%M") if e.clock_out_time else "-",
                    break_minutes=int(e.break_minutes or 0),
                    worked_minutes=minutes,
                    status=e.status.value,
                    notes=e.notes or "",
                )
            )
        return ReportData(rows=rows, total_minutes=total)


def report_csv_bytes(data: ReportData) -> bytes:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
    writer.writeheader()
    for row in data.rows:
        r = asdict(row)
        writer.writerow(
            {
                "work_date": r["work_date"],
                "clock_in": r["clock_in"],
                "clock_out": r["clock_out"],
                "break_minutes": r["break_minutes"],
                "worked_hours": format_minutes_hhmm(r["worked_minutes"]),
                "status": r["status"],
                "notes": r["notes"],
            }
        )
    return out.getvalue().encode("utf-8-sig")
