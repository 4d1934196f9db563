from tortoise import fields, models


class MenuItem(models.Model):
    id = fields.IntField(primary_key=True)
    name = fields.CharField(max_length=255)
    price = fields.DecimalField(max_digits=10, decimal_places=2)
    category = fields.CharField(max_length=100, default="")
    is_available = fields.BooleanField(default=True)
    position = fields.IntField(null=True) # Manual sort key set by the admin reorder screen

    # Inventory fields
    stock_quantity = fields.IntField(default=0)
    low_stock_threshold = fields.IntField(default=10) # For low stock alert
    unit_type = fields.CharField(max_length=50, default="pieces")
    ingredients = fields.JSONField(null=True) # {raw material name: quantity}
    supplier_info = fields.TextField(null=True)
    last_restocked = fields.DatetimeField(null=True)

    raw_material_links: fields.ReverseRelation["DishRawMaterial"]

    class Meta:
        table = "menu_items"
        indexes = [
            ("is_available",),          # Customer menu only shows available items
            ("category", "position"),   # Inventory listing order
        ]
