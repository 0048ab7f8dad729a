from datetime import date

from src.field_service.field_service.core.enums import CalendarView, Priority, ScheduleStatus
from src.field_service.field_service.schedules.calendar import (
    add_months,
    days_for_view,
    is_current_period,
    months_in_range,
    navigate,
    schedules_for_date,
    view_range,
    view_title,
    weeks,
)
from src.field_service.field_service.schedules.model import Schedule


def _schedule(schedule_id, start, end=None, start_time="09:00"):
    return Schedule(
        schedule_id=schedule_id,
        title=f"Job {schedule_id}",
        start_date=start,
        end_date=end,
        start_time=start_time,
        end_time="17:00",
        status=ScheduleStatus.SCHEDULED,
        priority=Priority.MEDIUM,
        user_id=1,
    )


def test_month_view_always_fills_six_weeks_from_sunday():
    days = days_for_view(date(2025, 1, 15), CalendarView.ONE_MONTH)

    assert len(days) == 42
    assert days[0] == date(2024, 12, 29)
    assert days[0].weekday() == 6
    assert len(weeks(days)) == 6


def test_week_views():
    assert view_range(date(2025, 1, 15), CalendarView.ONE_WEEK) == (date(2025, 1, 12), date(2025, 1, 18))
    assert len(days_for_view(date(2025, 1, 15), CalendarView.TWO_WEEKS)) == 14


def test_three_month_view_covers_neighbouring_months():
    start, end = view_range(date(2025, 1, 15), CalendarView.THREE_MONTHS)

    assert start == date(2024, 12, 1)
    assert end == date(2025, 3, 1)
    assert months_in_range(start, end) == [(12, 2024), (1, 2025), (2, 2025), (3, 2025)]


def test_navigation_steps_by_view():
    assert navigate(date(2025, 1, 15), CalendarView.ONE_WEEK, -1) == date(2025, 1, 8)
    assert navigate(date(2025, 1, 15), CalendarView.TWO_WEEKS, 1) == date(2025, 1, 29)
    assert navigate(date(2025, 1, 31), CalendarView.ONE_MONTH, 1) == date(2025, 2, 28)
    assert navigate(date(2025, 1, 15), CalendarView.THREE_MONTHS, 1) == date(2025, 4, 15)
    assert add_months(date(2024, 3, 31), -1) == date(2024, 2, 29)


def test_titles():
    assert view_title(date(2025, 1, 15), CalendarView.ONE_MONTH) == "January 2025"
    assert view_title(date(2025, 1, 15), CalendarView.ONE_WEEK) == "Jan 12 - Jan 18, 2025"
    assert view_title(date(2025, 1, 15), CalendarView.THREE_MONTHS) == "December 2024 - February 2025"
    assert view_title(date(2025, 5, 15), CalendarView.THREE_MONTHS) == "April - June 2025"


def test_padding_days_are_not_current_period():
    anchor = date(2025, 1, 15)

    assert is_current_period(date(2025, 1, 1), anchor, CalendarView.ONE_MONTH)
    assert not is_current_period(date(2024, 12, 31), anchor, CalendarView.ONE_MONTH)


def test_multi_day_schedules_appear_on_each_day_sorted_by_time():
    items = [
        _schedule(1, date(2025, 1, 14), date(2025, 1, 16), start_time="13:00"),
        _schedule(2, date(2025, 1, 15), start_time="08:00"),
        _schedule(3, date(2025, 1, 17)),
    ]

    assert [s.schedule_id for s in schedules_for_date(items, date(2025, 1, 15))] == [2, 1]
    assert [s.schedule_id for s in schedules_for_date(items, date(2025, 1, 16))] == [1]
