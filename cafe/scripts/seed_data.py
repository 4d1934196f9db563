# Seeds a demo menu, raw materials and the built-in roles.
import asyncio
import logging
from decimal import Decimal
from cafe.core.db import init_db, close_db
from cafe.models.menu import MenuItem
from cafe.models.inventory import RawMaterial, DishRawMaterial
from cafe.services.user_service import ensure_default_roles, ensure_initial_admin

log = logging.getLogger("cafe.seed")

MENU = [
    # name, category, price, stock
    ("Masala Tea", "Hot Drinks", "20.00", 100),
    ("Filter Coffee", "Hot Drinks", "30.00", 80),
    ("Cold Coffee", "Cold Drinks", "60.00", 40),
    ("Veg Sandwich", "Snacks", "70.00", 25),
    ("Samosa", "Snacks", "15.00", 50),
]

RAW_MATERIALS = [
    # name, unit, stock, minimum
    ("Milk", "litre", "20", "5"),
    ("Tea Leaves", "kg", "2", "0.5"),
    ("Coffee Powder", "kg", "3", "0.5"),
    ("Bread", "pieces", "40", "10"),
]

RECIPES = {
    "Masala Tea": [("Milk", "0.15"), ("Tea Leaves", "0.005")],
    "Filter Coffee": [("Milk", "0.1"), ("Coffee Powder", "0.01")],
    "Cold Coffee": [("Milk", "0.25"), ("Coffee Powder", "0.015")],
    "Veg Sandwich": [("Bread", "2")],
}


async def seed():
    await ensure_default_roles()
    await ensure_initial_admin()

    items = {}
    for position, (name, category, price, stock) in enumerate(MENU):
        item, _ = await MenuItem.get_or_create(
            name=name,
            defaults={"category": category, "price": Decimal(price), "stock_quantity": stock, "position": position},
        )
        items[name] = item
    log.info(f"Menu items: {', '.join(f'{i.name}={i.id}' for i in items.values())}")

    materials = {}
    for name, unit, stock, minimum in RAW_MATERIALS:
        material, _ = await RawMaterial.get_or_create(
            name=name,
            defaults={"unit_type": unit, "current_stock": Decimal(stock), "min_stock_level": Decimal(minimum)},
        )
        materials[name] = material

    for dish, needs in RECIPES.items():
        for material_name, quantity in needs:
            await DishRawMaterial.get_or_create(
                dish=items[dish],
                raw_material=materials[material_name],
                defaults={"quantity_required": Decimal(quantity)},
            )

    log.info("Demo data seeded.")


async def main():
    await init_db()
    await seed()
    await close_db()

if __name__ == "__main__":
    asyncio.run(main())
