import logging
from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from cafe.core.security import require_admin
from cafe.schemas.inventory import InventoryUpdate, StockAdjustment, InventoryItemResponse, DishRawMaterialLink
from cafe.schemas.menu import MenuItemResponse
from cafe.schemas.response import SuccessResponse, MessageData
from cafe.services.inventory_service import list_inventory, update_inventory, adjust_stock, set_dish_raw_materials

log = logging.getLogger("uvicorn")
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=SuccessResponse)
async def get_inventory():
    """All menu items with stock information and their raw materials."""
    try:
        items = await list_inventory()
        return SuccessResponse(data=[InventoryItemResponse.model_validate(i).model_dump(mode="json") for i in items])
    except Exception as e:
        log.error(f"Error fetching inventory: {e}")
        raise HTTPException(status_code=500, detail="Server failed to fetch inventory.")


@router.post("", response_model=SuccessResponse)
async def update_inventory_items(updates: List[InventoryUpdate]):
    """Updates inventory fields of several items. The whole batch fails together."""
    try:
        count = await update_inventory(updates)
        return SuccessResponse(data=MessageData(message=f"Inventory updated successfully ({count} items)").model_dump(mode="json"))
    except ValueError as e:
        log.error(f"Value error updating inventory: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error updating inventory: {e}")
        raise HTTPException(status_code=500, detail="Server failed to update inventory.")


@router.patch("", response_model=SuccessResponse)
async def adjust_stock_levels(adjustments: List[StockAdjustment]):
    """Restocks or consumes stock. Levels never drop below zero."""
    try:
        items = await adjust_stock(adjustments)
        return SuccessResponse(data=[MenuItemResponse.model_validate(i).model_dump(mode="json") for i in items])
    except ValueError as e:
        log.error(f"Value error adjusting stock levels: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error adjusting stock levels: {e}")
        raise HTTPException(status_code=500, detail="Server failed to adjust stock levels.")


@router.put("/{menu_item_id}/raw-materials", response_model=SuccessResponse)
async def link_raw_materials(menu_item_id: int, links: List[DishRawMaterialLink]):
    """Replaces the raw materials (and quantities) a dish is made of."""
    try:
        item = await set_dish_raw_materials(menu_item_id, links)
        if item is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Menu item not found")
        return SuccessResponse(data=InventoryItemResponse.model_validate(item).model_dump(mode="json"))
    except HTTPException:
        raise
    except ValueError as e:
        log.error(f"Value error linking raw materials: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error linking raw materials to {menu_item_id}: {e}")
        raise HTTPException(status_code=500, detail="Server failed to link raw materials.")
