import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status

from cafe.core.security import require_admin
from cafe.schemas.menu import MenuItemRequest, MenuItemUpdate, MenuItemResponse, MenuPositionRequest
from cafe.schemas.response import SuccessResponse
from cafe.services.menu_service import (
    list_menu,
    get_menu_item,
    create_menu_item,
    update_menu_item,
    delete_menu_item,
    reorder_menu,
)

log = logging.getLogger("uvicorn")
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

router = APIRouter()


def _dump(items):
    return [MenuItemResponse.model_validate(i).model_dump(mode="json") for i in items]


@router.get("", response_model=SuccessResponse)
async def get_menu(include_unavailable: bool = Query(False, alias="includeUnavailable")):
    """Menu in display order. Only available items unless includeUnavailable=true."""
    try:
        return SuccessResponse(data=_dump(await list_menu(include_unavailable)))
    except Exception as e:
        log.error(f"Error fetching menu: {e}")
        raise HTTPException(status_code=500, detail="Server failed to fetch menu.")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse, dependencies=[Depends(require_admin)])
async def add_menu_item(item_data: MenuItemRequest):
    try:
        item = await create_menu_item(item_data)
        return SuccessResponse(data=MenuItemResponse.model_validate(item).model_dump(mode="json"))
    except Exception as e:
        log.error(f"Error creating menu item: {e}")
        raise HTTPException(status_code=500, detail="Server failed to create menu item.")


# Declared before the /{item_id} routes so "position" is never read as an id
@router.put("/position", response_model=SuccessResponse, dependencies=[Depends(require_admin)])
async def save_menu_positions(payload: MenuPositionRequest):
    """Persists a full reordering of the menu."""
    try:
        return SuccessResponse(data=_dump(await reorder_menu(payload.menu_items)))
    except ValueError as e:
        log.error(f"Value error saving menu positions: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error saving menu positions: {e}")
        raise HTTPException(status_code=500, detail="Server failed to save menu positions.")


@router.get("/{item_id}", response_model=SuccessResponse)
async def get_menu_item_endpoint(item_id: int):
    try:
        item = await get_menu_item(item_id)
        if not item:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Menu item not found")
        return SuccessResponse(data=MenuItemResponse.model_validate(item).model_dump(mode="json"))
    except HTTPException:
        raise
    except Exception as e:
        log.error(f"Error fetching menu item {item_id}: {e}")
        raise HTTPException(status_code=500, detail="Server failed to fetch menu item.")


@router.put("/{item_id}", response_model=SuccessResponse, dependencies=[Depends(require_admin)])
async def edit_menu_item(item_id: int, patch: MenuItemUpdate):
    """Updates only the provided fields (e.g. toggling is_available)."""
    try:
        item = await update_menu_item(item_id, patch)
        if not item:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Menu item not found")
        return SuccessResponse(data=MenuItemResponse.model_validate(item).model_dump(mode="json"))
    except HTTPException:
        raise
    except Exception as e:
        log.error(f"Error updating menu item {item_id}: {e}")
        raise HTTPException(status_code=500, detail="Server failed to update menu item.")


@router.delete("/{item_id}", response_model=SuccessResponse, dependencies=[Depends(require_admin)])
async def remove_menu_item(item_id: int):
    try:
        if not await delete_menu_item(item_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Menu item not found")
        return SuccessResponse(data={"id": item_id, "deleted": True})
    except HTTPException:
        raise
    except Exception as e:
        log.error(f"Error deleting menu item {item_id}: {e}")
        raise HTTPException(status_code=500, detail="Server failed to delete menu item.")
