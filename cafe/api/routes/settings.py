import logging
from fastapi import APIRouter, Depends, HTTPException

from cafe.core.security import require_admin
from cafe.schemas.response import SuccessResponse
from cafe.schemas.settings import SettingResponse, TimezoneUpdate
from cafe.services.settings_service import list_settings, set_timezone

log = logging.getLogger("uvicorn")

router = APIRouter()


@router.get("", response_model=SuccessResponse)
async def get_settings():
    try:
        settings = await list_settings()
        data = [SettingResponse(setting_name=s.setting_name, setting_value=s.setting_value).model_dump(mode="json") for s in settings]
        return SuccessResponse(data=data)
    except Exception as e:
        log.error(f"Error fetching settings: {e}")
        raise HTTPException(status_code=500, detail="Server failed to fetch settings.")


@router.put("/timezone", response_model=SuccessResponse, dependencies=[Depends(require_admin)])
async def update_timezone(payload: TimezoneUpdate):
    """Sets the timezone that decides the café's current date."""
    try:
        setting = await set_timezone(payload.timezone)
        log.info(f"Timezone set to {setting.setting_value}.")
        return SuccessResponse(data=SettingResponse(setting_name=setting.setting_name, setting_value=setting.setting_value).model_dump(mode="json"))
    except ValueError as e:
        log.error(f"Value error updating timezone: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error updating timezone: {e}")
        raise HTTPException(status_code=500, detail="Server failed to update timezone.")
