"""
Stock keeping for menu items and raw materials.

Stock never goes negative: a subtraction larger than the stock leaves zero.
Low stock is only reported through the log; nothing is dispatched.
"""
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from tortoise import timezone
from tortoise.transactions import in_transaction

from cafe.models.inventory import DishRawMaterial, RawMaterial
from cafe.models.menu import MenuItem
from cafe.schemas.inventory import (
    DishRawMaterialLink,
    InventoryUpdate,
    RawMaterialRequest,
    RawMaterialUpdate,
    StockAction,
    StockAdjustment,
)

log = logging.getLogger("cafe.inventory")


def adjust_stock_level(current: int, quantity: int, action: StockAction) -> int:
    """
    New stock level after an adjustment, clamped at zero.

    >>> adjust_stock_level(3, 10, StockAction.SUBTRACT)
    0
    """
    if action == StockAction.ADD:
        return current + quantity
    return max(0, current - quantity)


def check_for_low_stock(item: MenuItem) -> bool:
    """Logs a low stock alert when the item is at or below its threshold."""
    if item.stock_quantity <= item.low_stock_threshold:
        log.warning(f"Low stock alert: {item.name} ({item.stock_quantity} remaining)")
        return True
    return False


def serialize_inventory_item(item: MenuItem) -> Dict[str, Any]:
    links = []
    for link in item.raw_material_links:
        material = link.raw_material
        links.append({
            "id": link.id,
            "dish_id": item.id,
            "raw_material_id": material.id,
            "quantity_required": link.quantity_required,
            "raw_material": {
                "id": material.id,
                "name": material.name,
                "unit_type": material.unit_type,
                "current_stock": material.current_stock,
                "min_stock_level": material.min_stock_level,
            },
        })
    return {
        "id": item.id,
        "name": item.name,
        "price": item.price,
        "category": item.category,
        "is_available": item.is_available,
        "position": item.position,
        "stock_quantity": item.stock_quantity,
        "low_stock_threshold": item.low_stock_threshold,
        "unit_type": item.unit_type,
        "ingredients": item.ingredients,
        "supplier_info": item.supplier_info,
        "last_restocked": item.last_restocked,
        "raw_materials": links,
    }


async def list_inventory() -> List[Dict[str, Any]]:
    """Every menu item with its stock fields and linked raw materials."""
    items = await MenuItem.all().prefetch_related("raw_material_links__raw_material")
    items.sort(key=lambda i: (i.category or "", i.position is None, i.position or 0, i.name))
    return [serialize_inventory_item(item) for item in items]


async def update_inventory(updates: List[InventoryUpdate]) -> int:
    """
    Writes the inventory fields of many items in one transaction. Setting
    stock_quantity stamps last_restocked. Any failure rolls back the batch.
    """
    async with in_transaction() as conn:
        for update in updates:
            item = await MenuItem.get_or_none(id=update.id).using_db(conn)
            if not item:
                raise ValueError(f"Menu item {update.id} not found.")

            changes = update.model_dump(exclude_unset=True, exclude_none=True, exclude={"id"})
            if "stock_quantity" in changes:
                changes["last_restocked"] = timezone.now()
            if changes:
                item.update_from_dict(changes)
                await item.save(update_fields=list(changes), using_db=conn)

    log.info(f"Inventory updated for {len(updates)} item(s).")
    return len(updates)


async def adjust_stock(adjustments: List[StockAdjustment]) -> List[MenuItem]:
    """Applies add/subtract adjustments in one transaction with the rows locked."""
    adjusted = []
    async with in_transaction() as conn:
        ids = [a.id for a in adjustments]
        locked = await MenuItem.filter(id__in=ids).using_db(conn).select_for_update()
        items = {item.id: item for item in locked}

        for adjustment in adjustments:
            item = items.get(adjustment.id)
            if not item:
                raise ValueError(f"Menu item {adjustment.id} not found.")

            item.stock_quantity = adjust_stock_level(item.stock_quantity, adjustment.quantity, adjustment.action)
            update_fields = ["stock_quantity"]
            if adjustment.action == StockAction.ADD:
                item.last_restocked = timezone.now()
                update_fields.append("last_restocked")
            await item.save(update_fields=update_fields, using_db=conn)

            if adjustment.action == StockAction.SUBTRACT:
                check_for_low_stock(item)
            adjusted.append(item)

    return adjusted


async def set_dish_raw_materials(menu_item_id: int, links: List[DishRawMaterialLink]) -> Optional[Dict[str, Any]]:
    """Replaces the raw materials a dish is made of. None if the dish is unknown."""
    async with in_transaction() as conn:
        item = await MenuItem.get_or_none(id=menu_item_id).using_db(conn)
        if not item:
            return None

        material_ids = [link.raw_material_id for link in links]
        if len(set(material_ids)) != len(material_ids):
            raise ValueError("Each raw material may be linked only once.")
        found = set(await RawMaterial.filter(id__in=material_ids).using_db(conn).values_list("id", flat=True))
        missing = [i for i in material_ids if i not in found]
        if missing:
            raise ValueError(f"Unknown raw material id(s): {', '.join(map(str, missing))}.")

        await DishRawMaterial.filter(dish_id=menu_item_id).using_db(conn).delete()
        for link in links:
            await DishRawMaterial.create(
                dish_id=menu_item_id,
                raw_material_id=link.raw_material_id,
                quantity_required=Decimal(str(link.quantity_required)),
                using_db=conn,
            )

    await item.fetch_related("raw_material_links__raw_material")
    return serialize_inventory_item(item)


# ----------- Raw materials -----------

def is_low_stock(material: RawMaterial) -> bool:
    return material.current_stock <= material.min_stock_level


def serialize_raw_material(material: RawMaterial) -> Dict[str, Any]:
    return {
        "id": material.id,
        "name": material.name,
        "description": material.description,
        "unit_type": material.unit_type,
        "current_stock": material.current_stock,
        "min_stock_level": material.min_stock_level,
        "supplier_info": material.supplier_info,
        "is_low_stock": is_low_stock(material),
        "created_at": material.created_at,
        "updated_at": material.updated_at,
    }


async def list_raw_materials() -> List[RawMaterial]:
    return await RawMaterial.all().order_by("name")


async def create_raw_material(data: RawMaterialRequest) -> RawMaterial:
    if await RawMaterial.filter(name=data.name).exists():
        raise ValueError(f"Raw material '{data.name}' already exists.")
    material = await RawMaterial.create(
        name=data.name,
        description=data.description,
        unit_type=data.unit_type,
        current_stock=Decimal(str(data.current_stock)),
        min_stock_level=Decimal(str(data.min_stock_level)),
        supplier_info=data.supplier_info,
    )
    log.info(f"Raw material '{material.name}' ({material.id}) created.")
    return material


async def update_raw_materials(updates: List[RawMaterialUpdate]) -> List[RawMaterial]:
    """Batch partial update, all or nothing."""
    updated = []
    async with in_transaction() as conn:
        for update in updates:
            material = await RawMaterial.get_or_none(id=update.id).using_db(conn)
            if not material:
                raise ValueError(f"Raw material {update.id} not found.")

            changes = update.model_dump(exclude_unset=True, exclude_none=True, exclude={"id"})
            for key in ("current_stock", "min_stock_level"):
                if key in changes:
                    changes[key] = Decimal(str(changes[key]))
            if changes:
                material.update_from_dict(changes)
                await material.save(using_db=conn)
            if is_low_stock(material):
                log.warning(f"Low stock alert: {material.name} ({material.current_stock} {material.unit_type} remaining)")
            updated.append(material)
    return updated


async def delete_raw_material(material_id: int) -> bool:
    return bool(await RawMaterial.filter(id=material_id).delete())
