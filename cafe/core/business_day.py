"""
The café's notion of "today".

Order numbers restart every day and served orders are credited to the day's
sales row, so both need the current date in the café's configured timezone
rather than the server's. The timezone is stored as a short code in the
``system_settings`` table and falls back to DEFAULT_TIMEZONE.
"""
import logging
from datetime import date, datetime
from typing import Any, Optional

import pytz

from cafe.core.config import DEFAULT_TIMEZONE
from cafe.models.settings import SystemSetting

log = logging.getLogger("cafe.business_day")

TIMEZONE_SETTING = "timezone"

# Short codes accepted by the settings endpoint, mapped to IANA names
TIMEZONES = {
    "IST": "Asia/Kolkata",
    "UTC": "UTC",
    "EST": "America/New_York",
    "PST": "America/Los_Angeles",
    "CET": "Europe/Paris",
}


def resolve_timezone(code: Optional[str]) -> pytz.BaseTzInfo:
    """
    Maps a timezone code to a pytz timezone. Unknown codes use the default.

    Examples:
        >>> resolve_timezone("UTC").zone
        'UTC'
        >>> resolve_timezone("nowhere").zone == TIMEZONES[DEFAULT_TIMEZONE]
        True
    """
    name = TIMEZONES.get(code or "", TIMEZONES.get(DEFAULT_TIMEZONE, "Asia/Kolkata"))
    return pytz.timezone(name)


def local_date(now: datetime, code: Optional[str]) -> date:
    """Date of an instant as seen from the café. Naive datetimes are taken as UTC."""
    if now.tzinfo is None:
        now = pytz.UTC.localize(now)
    return now.astimezone(resolve_timezone(code)).date()


async def get_configured_timezone(conn: Any = None) -> str:
    """Reads the timezone code from system settings."""
    setting = await SystemSetting.get_or_none(setting_name=TIMEZONE_SETTING).using_db(conn)
    if setting and setting.setting_value in TIMEZONES:
        return setting.setting_value
    if setting:
        log.warning(f"Unknown timezone setting '{setting.setting_value}', using {DEFAULT_TIMEZONE}.")
    return DEFAULT_TIMEZONE


async def today(conn: Any = None) -> date:
    """Current date in the configured café timezone."""
    code = await get_configured_timezone(conn)
    return local_date(datetime.now(pytz.UTC), code)
