from datetime import date, datetime
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser as date_parser

from shared.core.config import settings
from shared.core.exceptions import ValidationError
from shared.utils.app_status_code import AppStatusCode


def parse_task_date(value: Union[date, datetime, str, None]) -> date:
    """Normalise a calendar day; any time-of-day part is dropped."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        raise ValidationError("Date is required", AppStatusCode.INVALID_DATE)

    try:
        # UI sends new Date().toISOString(), e.g. 2024-06-01T10:15:00.000Z
        return date_parser.isoparse(value).date()
    except ValueError:
        pass
    try:
        return date_parser.parse(value).date()
    except (ValueError, OverflowError):
        raise ValidationError(f"Invalid date: {value}", AppStatusCode.INVALID_DATE)


def get_zone(tz_name: Optional[str]) -> ZoneInfo:
    try:
        return ZoneInfo(tz_name or settings.DEFAULT_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo(settings.DEFAULT_TIMEZONE)


def today_in(tz_name: Optional[str] = None) -> date:
    return datetime.now(get_zone(tz_name)).date()
