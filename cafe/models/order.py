from enum import Enum
from tortoise import fields, models
import uuid


class OrderStatus(str, Enum):
    PENDING = "pending"
    PREPARING = "preparing" # Initial state of every new order
    READY = "ready"
    SERVED = "served" # Counts toward revenue
    CANCELLED = "cancelled"


class Order(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    # Human-facing number, unique only within order_date
    order_number = fields.CharField(max_length=16)
    sequence = fields.IntField()
    order_date = fields.DateField()
    # Snapshot of the ordered menu items, each with its quantity
    items = fields.JSONField(default=list)
    total = fields.DecimalField(max_digits=12, decimal_places=2, default=0)
    status = fields.CharEnumField(OrderStatus, default=OrderStatus.PREPARING)
    order_time = fields.DatetimeField(auto_now_add=True)
    updated_time = fields.DatetimeField(null=True)

    class Meta:
        table = "orders"
        unique_together = (("order_date", "sequence"),)
        indexes = [
            ("status",),                 # Status-based filtering
            ("order_time",),             # Queue ordering
            ("status", "order_date"),    # Composite: served orders per day
        ]
