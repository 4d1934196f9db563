from tortoise import fields, models


class DailySale(models.Model):
    """
    Rolling per-day totals. Incremented each time an order is served; never
    recomputed from the orders table.
    """
    id = fields.IntField(primary_key=True)
    sale_date = fields.DateField(unique=True)
    total_orders = fields.IntField(default=0)
    total_revenue = fields.DecimalField(max_digits=14, decimal_places=2, default=0)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "daily_sales"
