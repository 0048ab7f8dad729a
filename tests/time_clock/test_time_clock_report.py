import csv
import io
from datetime import date, datetime

from src.field_service.field_service.core.enums import ClockStatus
from src.field_service.field_service.time_clock.model import TimeClockEntry
from src.field_service.field_service.time_clock.report import TimeClockReportService, report_csv_bytes


class FakeEntries:
    def __init__(self, entries):
        self._entries = entries

    def list_entries(self):
        return self._entries


def _entry(entry_id, day, start_h, end_h, break_minutes=0, notes=None):
    return TimeClockEntry(
        entry_id=entry_id,
        clock_in_time=datetime(2026, 1, day, start_h, 0),
        clock_out_time=datetime(2026, 1, day, end_h, 0) if end_h else None,
        total_hours=None,
        break_minutes=break_minutes,
        status=ClockStatus.CLOCKED_OUT if end_h else ClockStatus.CLOCKED_IN,
        notes=notes,
    )


def test_report_filters_range_and_totals():
    entries = [
        _entry(3, 20, 8, 12),
        _entry(1, 5, 8, 17, break_minutes=60),
        _entry(2, 6, 9, 13, break_minutes=30),
    ]
    svc = TimeClockReportService(FakeEntries(entries))

    data = svc.build_report(start=date(2026, 1, 1), end=date(2026, 1, 10))

    assert [r.entry_id for r in data.rows] == [1, 2]
    assert data.rows[0].worked_minutes == 8 * 60
    assert data.total_hours == "11:30"


def test_report_skips_entries_without_clock_in():
    undated = TimeClockEntry(
        entry_id=9,
        clock_in_time=None,
        clock_out_time=None,
        total_hours=None,
        break_minutes=0,
        status=ClockStatus.CLOCKED_OUT,
    )
    svc = TimeClockReportService(FakeEntries([undated, _entry(1, 5, 8, 12)]))

    data = svc.build_report(start=date(2026, 1, 1), end=date(2026, 1, 10))

    assert [r.entry_id for r in data.rows] == [1]


def test_csv_has_bom_header_and_rows():
    svc = TimeClockReportService(FakeEntries([_entry(1, 5, 8, 17, break_minutes=60, notes="Site A")]))
    data = svc.build_report(start=date(2026, 1, 1), end=date(2026, 1, 31))

    raw = report_csv_bytes(data)

    assert raw.startswith(b"\xef\xbb\xbf")
    rows = list(csv.DictReader(io.StringIO(raw.decode("utf-8-sig"))))
    assert rows == [
        {
            "work_date": "2026-01-05",
            "clock_in": "08:00",
            "clock_out": "17:00",
            "break_minutes": "60",
            "worked_hours": "08:00",
            "status": "clocked_out",
            "notes": "Site A",
        }
    ]
