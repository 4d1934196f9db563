from tortoise import fields, models


class RawMaterial(models.Model):
    id = fields.IntField(primary_key=True)
    name = fields.CharField(max_length=255, unique=True)
    description = fields.TextField(null=True)
    unit_type = fields.CharField(max_length=50, default="kg")
    current_stock = fields.DecimalField(max_digits=12, decimal_places=3, default=0)
    min_stock_level = fields.DecimalField(max_digits=12, decimal_places=3, default=0)
    supplier_info = fields.TextField(null=True)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "raw_materials"


class DishRawMaterial(models.Model):
    """How much of a raw material one unit of a dish needs."""
    id = fields.IntField(primary_key=True)
    dish = fields.ForeignKeyField("models.MenuItem", related_name="raw_material_links", on_delete=fields.CASCADE)
    raw_material = fields.ForeignKeyField("models.RawMaterial", related_name="dish_links", on_delete=fields.CASCADE)
    quantity_required = fields.DecimalField(max_digits=12, decimal_places=3)

    class Meta:
        table = "dish_raw_materials"
        unique_together = (("dish", "raw_material"),)
