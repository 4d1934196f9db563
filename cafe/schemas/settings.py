from pydantic import BaseModel


class SettingResponse(BaseModel):
    setting_name: str
    setting_value: str


class TimezoneUpdate(BaseModel):
    timezone: str
