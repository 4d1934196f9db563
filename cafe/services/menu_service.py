import logging
from decimal import Decimal
from typing import List, Optional

from tortoise.transactions import in_transaction

from cafe.models.menu import MenuItem
from cafe.schemas.menu import MenuItemRequest, MenuItemUpdate, MenuPositionEntry

log = logging.getLogger("cafe.menu")


def menu_sort_key(item: MenuItem):
    """Explicit positions first (ascending), then category and name."""
    return (item.position is None, item.position or 0, item.category or "", item.name)


async def list_menu(include_unavailable: bool = False) -> List[MenuItem]:
    query = MenuItem.all() if include_unavailable else MenuItem.filter(is_available=True)
    return sorted(await query, key=menu_sort_key)


async def get_menu_item(item_id: int) -> Optional[MenuItem]:
    return await MenuItem.get_or_none(id=item_id)


async def create_menu_item(data: MenuItemRequest) -> MenuItem:
    position = data.position
    if position is None:
        last = await MenuItem.filter(position__isnull=False).order_by("-position").first()
        position = (last.position + 1) if last else 0

    item = await MenuItem.create(
        name=data.name,
        price=Decimal(str(data.price)),
        category=data.category,
        is_available=data.is_available,
        position=position,
    )
    log.info(f"Menu item '{item.name}' ({item.id}) created at position {position}.")
    return item


async def update_menu_item(item_id: int, patch: MenuItemUpdate) -> Optional[MenuItem]:
    item = await MenuItem.get_or_none(id=item_id)
    if not item:
        return None

    changes = patch.model_dump(exclude_unset=True, exclude_none=True)
    if "price" in changes:
        changes["price"] = Decimal(str(changes["price"]))
    if changes:
        item.update_from_dict(changes)
        await item.save(update_fields=list(changes))
    return item


async def delete_menu_item(item_id: int) -> bool:
    return bool(await MenuItem.filter(id=item_id).delete())


async def reorder_menu(entries: List[MenuPositionEntry]) -> List[MenuItem]:
    """
    Persists a full reordering of the menu. Each entry keeps its explicit
    position, or takes its index in the list when it has none. Unknown ids
    fail the whole batch.
    """
    ids = [entry.id for entry in entries]
    async with in_transaction() as conn:
        existing = {item.id: item for item in await MenuItem.filter(id__in=ids).using_db(conn)}
        missing = [i for i in ids if i not in existing]
        if missing:
            raise ValueError(f"Unknown menu item id(s): {', '.join(map(str, missing))}.")

        for index, entry in enumerate(entries):
            item = existing[entry.id]
            item.position = entry.position if entry.position is not None else index
            await item.save(update_fields=["position"], using_db=conn)

    log.info(f"Menu reordered ({len(entries)} items).")
    return sorted(existing.values(), key=menu_sort_key)
