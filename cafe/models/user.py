from enum import Enum
from tortoise import fields, models


class RoleName(str, Enum):
    ADMIN = "admin"
    CHEF = "chef"
    USER = "user"


class Role(models.Model):
    id = fields.IntField(primary_key=True)
    role_name = fields.CharEnumField(RoleName, unique=True)
    permissions = fields.JSONField(default=list)

    class Meta:
        table = "roles"


class User(models.Model):
    id = fields.IntField(primary_key=True)
    username = fields.CharField(max_length=150, unique=True)
    password_hash = fields.CharField(max_length=255)
    role = fields.ForeignKeyField("models.Role", related_name="users", on_delete=fields.RESTRICT)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "users"


class UserSession(models.Model):
    """Opaque bearer token issued at login."""
    token = fields.CharField(max_length=128, primary_key=True)
    user = fields.ForeignKeyField("models.User", related_name="sessions", on_delete=fields.CASCADE)
    created_at = fields.DatetimeField(auto_now_add=True)
    expires_at = fields.DatetimeField()

    class Meta:
        table = "user_sessions"
