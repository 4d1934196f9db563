import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Optional
from uuid import UUID
from decimal import Decimal

from cafe.core.security import require_staff
from cafe.schemas.order import OrderRequest, OrderUpdate, OrderPlacementResponse, OrderDetailResponse
from cafe.schemas.response import SuccessResponse
from cafe.services.order_service import (
    place_order,
    get_order_by_id,
    list_orders,
    update_order,
    delete_order,
    parse_status_filter,
)

router = APIRouter()
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
log = logging.getLogger("uvicorn")


@router.get("", response_model=SuccessResponse)
async def list_orders_endpoint(
    status_filter: Optional[str] = Query(None, alias="status"),
    include_served: bool = Query(False, alias="includeServed"),
):
    """
    Lists orders oldest first. Served orders are hidden unless includeServed=true
    or 'served' is part of the status filter (comma separated).
    """
    try:
        statuses = parse_status_filter(status_filter)
        orders = await list_orders(statuses, include_served)
        data = [OrderDetailResponse.model_validate(o).model_dump(mode="json") for o in orders]
        return SuccessResponse(data=data)
    except ValueError as e:
        log.error(f"Value error listing orders: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error fetching orders: {e}")
        raise HTTPException(status_code=500, detail="Server failed to fetch orders.")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_order_endpoint(request_data: OrderRequest):
    """Places a new order. It starts in the 'preparing' state."""
    try:
        if not request_data.items:
            raise HTTPException(status_code=400, detail="Order must contain items.")

        items = [item.model_dump(mode="json") for item in request_data.items]
        total = Decimal(str(request_data.total)) if request_data.total is not None else None
        order = await place_order(items=items, total=total)

        data = OrderPlacementResponse(
            id=order.id,
            order_number=order.order_number,
            status=order.status,
            total=order.total,
        ).model_dump(mode="json")
        return SuccessResponse(data=data)
    except HTTPException:
        raise
    except ValueError as e:
        log.error(f"Value error placing order: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error placing order: {e}")
        raise HTTPException(status_code=500, detail="Server failed to place order.")


@router.get("/{order_id}", response_model=SuccessResponse)
async def get_order_endpoint(order_id: UUID):
    """Fetches details for a specific order."""
    try:
        order = await get_order_by_id(order_id)
        if not order:
            raise HTTPException(status_code=404, detail="Order not found")
        return SuccessResponse(data=OrderDetailResponse.model_validate(order).model_dump(mode="json"))
    except HTTPException:
        raise
    except Exception as e:
        log.error(f"Error fetching order {order_id}: {e}")
        raise HTTPException(status_code=500, detail="Server failed to fetch order details.")


@router.put("/{order_id}", response_model=SuccessResponse, dependencies=[Depends(require_staff)])
async def update_order_endpoint(order_id: UUID, payload: OrderUpdate):
    """
    Updates items, total and/or status. Setting status to 'served' adds the
    order to today's sales. Saving an order with no items deletes it.
    """
    try:
        if payload.is_empty():
            raise HTTPException(status_code=400, detail="No fields to update")

        if payload.items is not None and not payload.items:
            if not await delete_order(order_id):
                raise HTTPException(status_code=404, detail="Order not found")
            return SuccessResponse(data={"id": order_id, "deleted": True})

        order = await update_order(order_id, payload)
        if not order:
            raise HTTPException(status_code=404, detail="Order not found")
        return SuccessResponse(data=OrderDetailResponse.model_validate(order).model_dump(mode="json"))
    except HTTPException:
        raise
    except ValueError as e:
        log.error(f"Value error updating order: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error updating order {order_id}: {e}")
        raise HTTPException(status_code=500, detail="Server failed to update order.")


@router.delete("/{order_id}", response_model=SuccessResponse, dependencies=[Depends(require_staff)])
async def delete_order_endpoint(order_id: UUID):
    """Deletes an order in any state. Recorded daily sales are not adjusted."""
    try:
        if not await delete_order(order_id):
            raise HTTPException(status_code=404, detail="Order not found")
        return SuccessResponse(data={"id": order_id, "deleted": True})
    except HTTPException:
        raise
    except Exception as e:
        log.error(f"Error deleting order {order_id}: {e}")
        raise HTTPException(status_code=500, detail="Server failed to delete order.")
