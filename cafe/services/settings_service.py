from typing import List

from cafe.core.business_day import TIMEZONE_SETTING, TIMEZONES
from cafe.models.settings import SystemSetting


async def list_settings() -> List[SystemSetting]:
    return await SystemSetting.all().order_by("setting_name")


async def set_timezone(code: str) -> SystemSetting:
    """Stores the café timezone. Only the known short codes are accepted."""
    code = code.strip().upper()
    if code not in TIMEZONES:
        raise ValueError(f"Unsupported timezone '{code}'. Allowed: {', '.join(TIMEZONES)}.")
    setting, _ = await SystemSetting.update_or_create(
        setting_name=TIMEZONE_SETTING, defaults={"setting_value": code}
    )
    return setting
