import logging
from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from cafe.core.security import require_admin
from cafe.schemas.inventory import RawMaterialRequest, RawMaterialUpdate, RawMaterialResponse
from cafe.schemas.response import SuccessResponse
from cafe.services.inventory_service import (
    list_raw_materials,
    create_raw_material,
    update_raw_materials,
    delete_raw_material,
    serialize_raw_material,
)

log = logging.getLogger("uvicorn")

router = APIRouter(dependencies=[Depends(require_admin)])


def _dump(material):
    return RawMaterialResponse.model_validate(serialize_raw_material(material)).model_dump(mode="json")


@router.get("", response_model=SuccessResponse)
async def get_raw_materials():
    try:
        return SuccessResponse(data=[_dump(m) for m in await list_raw_materials()])
    except Exception as e:
        log.error(f"Error fetching raw materials: {e}")
        raise HTTPException(status_code=500, detail="Server failed to fetch raw materials.")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def add_raw_material(material_data: RawMaterialRequest):
    try:
        return SuccessResponse(data=_dump(await create_raw_material(material_data)))
    except ValueError as e:
        log.error(f"Value error creating raw material: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error creating raw material: {e}")
        raise HTTPException(status_code=500, detail="Server failed to create raw material.")


@router.patch("", response_model=SuccessResponse)
async def edit_raw_materials(updates: List[RawMaterialUpdate]):
    """Batch update; the whole batch fails together."""
    try:
        return SuccessResponse(data=[_dump(m) for m in await update_raw_materials(updates)])
    except ValueError as e:
        log.error(f"Value error updating raw materials: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error updating raw materials: {e}")
        raise HTTPException(status_code=500, detail="Server failed to update raw materials.")


@router.delete("/{material_id}", response_model=SuccessResponse)
async def remove_raw_material(material_id: int):
    try:
        if not await delete_raw_material(material_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Raw material not found")
        return SuccessResponse(data={"id": material_id, "deleted": True})
    except HTTPException:
        raise
    except Exception as e:
        log.error(f"Error deleting raw material {material_id}: {e}")
        raise HTTPException(status_code=500, detail="Server failed to delete raw material.")
