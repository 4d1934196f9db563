# cafe/models/__init__.py
from .menu import MenuItem
from .inventory import RawMaterial, DishRawMaterial
from .order import Order, OrderStatus
from .sales import DailySale
from .user import Role, RoleName, User, UserSession
from .settings import SystemSetting

# Export all models
__all__ = [
    "MenuItem",
    "RawMaterial",
    "DishRawMaterial",
    "Order",
    "OrderStatus",
    "DailySale",
    "Role",
    "RoleName",
    "User",
    "UserSession",
    "SystemSetting",
]
