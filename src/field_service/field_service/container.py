from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests

from .api.connection import ApiConfig, ApiConnection
from .api.query_cache import QueryClient
from .calls.http_call_repository import HttpCallRepository
from .calls.service import CallService
from .core.constants import DEFAULT_QUERY_CACHE_MAX_ITEMS, DEFAULT_QUERY_STALE_SECONDS
from .employees.http_employee_repository import HttpEmployeeRepository, HttpHrRecordRepository
from .employees.service import HrService
from .fuel.http_fuel_repository import HttpFuelRepository
from .fuel.service import FuelService
from .organizations.http_saas_repository import HttpSaasAdminRepository
from .organizations.service import SaasAdminService
from .promotions.http_promotion_repository import HttpPromotionRepository
from .promotions.service import PromotionService
from .schedules.http_schedule_repository import HttpScheduleRepository
from .schedules.service import ScheduleService
from .time_clock.http_time_clock_repository import HttpTaskTriggerRepository, HttpTimeClockRepository
from .time_clock.report import TimeClockReportService
from .time_clock.service import TimeClockService
from .time_clock.triggers import TaskTriggerService


@dataclass(frozen=True)
class Container:
    conn: ApiConnection
    queries: QueryClient

    saas_repo: HttpSaasAdminRepository
    promotions_repo: HttpPromotionRepository
    employees_repo: HttpEmployeeRepository
    hr_records_repo: HttpHrRecordRepository
    schedules_repo: HttpScheduleRepository
    time_clock_repo: HttpTimeClockRepository
    task_triggers_repo: HttpTaskTriggerRepository
    calls_repo: HttpCallRepository
    fuel_repo: HttpFuelRepository

    saas_admin_service: SaasAdminService
    promotion_service: PromotionService
    hr_service: HrService
    schedule_service: ScheduleService
    time_clock_service: TimeClockService
    task_trigger_service: TaskTriggerService
    time_clock_report_service: TimeClockReportService
    call_service: CallService
    fuel_service: FuelService


def build_container(
    *,
    api_config: dict,
    stale_seconds: int = DEFAULT_QUERY_STALE_SECONDS,
    max_items: int = DEFAULT_QUERY_CACHE_MAX_ITEMS,
    session: Optional[requests.Session] = None,
) -> Container:
    config = ApiConfig(
        base_url=str(api_config["base_url"]),
        token=str(api_config.get("token") or ""),
        timeout_seconds=int(api_config.get("timeout_seconds", 30)),
    )
    if session is not None:
        conn = ApiConnection(config, session=session)
    else:
        conn = ApiConnection.get_instance(config)
    queries = QueryClient(conn, stale_seconds=stale_seconds, max_items=max_items)

    saas_repo = HttpSaasAdminRepository(conn, queries)
    promotions_repo = HttpPromotionRepository(conn, queries)
    employees_repo = HttpEmployeeRepository(conn, queries)
    hr_records_repo = HttpHrRecordRepository(conn, queries)
    schedules_repo = HttpScheduleRepository(conn, queries)
    time_clock_repo = HttpTimeClockRepository(conn, queries)
    task_triggers_repo = HttpTaskTriggerRepository(conn, queries)
    calls_repo = HttpCallRepository(conn, queries)
    fuel_repo = HttpFuelRepository(conn, queries)

    return Container(
        conn=conn,
        queries=queries,
        saas_repo=saas_repo,
        promotions_repo=promotions_repo,
        employees_repo=employees_repo,
        hr_records_repo=hr_records_repo,
        schedules_repo=schedules_repo,
        time_clock_repo=time_clock_repo,
        task_triggers_repo=task_triggers_repo,
        calls_repo=calls_repo,
        fuel_repo=fuel_repo,
        saas_admin_service=SaasAdminService(saas_repo),
        promotion_service=PromotionService(promotions_repo),
        hr_service=HrService(employees_repo, hr_records_repo),
        schedule_service=ScheduleService(schedules_repo),
        time_clock_service=TimeClockService(time_clock_repo),
        task_trigger_service=TaskTriggerService(task_triggers_repo),
        time_clock_report_service=TimeClockReportService(time_clock_repo),
        call_service=CallService(calls_repo),
        fuel_service=FuelService(fuel_repo),
    )
