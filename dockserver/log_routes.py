"""API routes for the query audit log and the process log files."""

from fastapi import APIRouter, Depends

from agentdock.logging_config import COMBINED_LOG, ERROR_LOG, read_log_tail
from agentdock.models.query_log import DailyLog, LogPage, QueryLogEntry, SortOrder
from dockserver.services import Services, get_services

router = APIRouter()


@router.get("/logs/queries")
def list_query_logs(
    page: int = 1,
    limit: int = 20,
    sort: SortOrder = SortOrder.desc,
    services: Services = Depends(get_services),
) -> LogPage:
    """page through audited queries, newest first by default."""
    return services.audit.list_page(page, limit, sort)


@router.get("/logs/queries/{log_id}")
def get_query_log(log_id: str, services: Services = Depends(get_services)) -> QueryLogEntry:
    return services.audit.get(log_id)


@router.get("/logs/daily/{date}")
def get_daily_log(date: str, services: Services = Depends(get_services)) -> DailyLog:
    """all queries audited on one UTC day (YYYY-MM-DD)."""
    return services.audit.list_for_day(date)


@router.get("/logs/system")
def get_system_log(lines: int = 100, services: Services = Depends(get_services)) -> dict:
    """last lines of the combined process log."""
    return {"logs": read_log_tail(services.settings.server.log_dir / COMBINED_LOG, lines)}


@router.get("/logs/errors")
def get_error_log(lines: int = 100, services: Services = Depends(get_services)) -> dict:
    """last lines of the error-only process log."""
    return {"logs": read_log_tail(services.settings.server.log_dir / ERROR_LOG, lines)}
