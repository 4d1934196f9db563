from tortoise import fields, models


class SystemSetting(models.Model):
    id = fields.IntField(primary_key=True)
    setting_name = fields.CharField(max_length=100, unique=True)
    setting_value = fields.CharField(max_length=255)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "system_settings"
