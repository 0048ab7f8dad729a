from __future__ import annotations

from enum import Enum


class DiscountType(str, Enum):
    """How a promotion discount is computed."""

    PERCENTAGE = "percentage"
    FIXED_AMOUNT = "fixed_amount"
    FREE_TRIAL = "free_trial"


class PromotionStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    EXPIRED = "expired"
    ARCHIVED = "archived"


class SubscriptionStatus(str, Enum):
    TRIAL = "trial"
    ACTIVE = "active"
    PAST_DUE = "past_due"
    CANCELLED = "cancelled"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ON_LEAVE = "on_leave"


class TimeOffType(str, Enum):
    VACATION = "vacation"
    SICK = "sick"
    PERSONAL = "personal"
    OTHER = "other"


class RequestStatus(str, Enum):
    """Approval workflow state for time-off requests."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ReviewStatus(str, Enum):
    DRAFT = "draft"
    COMPLETED = "completed"
    PENDING_EMPLOYEE_REVIEW = "pending_employee_review"


class DisciplinaryType(str, Enum):
    VERBAL_WARNING = "verbal_warning"
    WRITTEN_WARNING = "written_warning"
    SUSPENSION = "suspension"
    TERMINATION = "termination"
    COUNSELING = "counseling"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class DisciplinaryStatus(str, Enum):
    ACTIVE = "active"
    RESOLVED = "resolved"
    APPEALED = "appealed"
    OVERTURNED = "overturned"


class ScheduleStatus(str, Enum):
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class CalendarView(str, Enum):
    ONE_WEEK = "1week"
    TWO_WEEKS = "2weeks"
    ONE_MONTH = "1month"
    THREE_MONTHS = "3months"


class ClockStatus(str, Enum):
    """Current time-clock state of the signed-in employee."""

    CLOCKED_IN = "clocked_in"
    ON_BREAK = "on_break"
    CLOCKED_OUT = "clocked_out"


class TriggerEvent(str, Enum):
    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"
    BREAK_START = "break_start"
    BREAK_END = "break_end"


class TriggerFrequency(str, Enum):
    EVERY_TIME = "every_time"
    ONCE_PER_DAY = "once_per_day"


class CallDirection(str, Enum):
    INBOUND = "inbound"
    OUTBOUND = "outbound"


class CallStatus(str, Enum):
    COMPLETED = "completed"
    MISSED = "missed"
    BUSY = "busy"
    FAILED = "failed"


class ActiveCallStatus(str, Enum):
    CONNECTING = "connecting"
    RINGING = "ringing"
    ACTIVE = "active"
    HOLD = "hold"
