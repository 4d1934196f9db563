import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional

from cafe.core.security import require_admin, require_staff
from cafe.schemas.response import SuccessResponse
from cafe.schemas.sales import DailySaleResponse, TodaySalesResponse, SalesReportResponse
from cafe.services.sales_service import list_daily_sales, get_today, reset_today, sales_report

log = logging.getLogger("uvicorn")
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

router = APIRouter()
report_router = APIRouter()


@router.get("", response_model=SuccessResponse, dependencies=[Depends(require_admin)])
async def get_daily_sales(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
):
    """Daily sales rows, newest first, optionally limited to a date range."""
    try:
        rows = await list_daily_sales(start_date, end_date)
        return SuccessResponse(data=[DailySaleResponse.model_validate(r).model_dump(mode="json") for r in rows])
    except Exception as e:
        log.error(f"Error fetching daily sales: {e}")
        raise HTTPException(status_code=500, detail="Server failed to fetch daily sales.")


@router.get("/today", response_model=SuccessResponse, dependencies=[Depends(require_staff)])
async def get_today_sales():
    """Today's counters; zeros when nothing has been served yet."""
    try:
        return SuccessResponse(data=TodaySalesResponse(**await get_today()).model_dump(mode="json"))
    except Exception as e:
        log.error(f"Error fetching today's sales: {e}")
        raise HTTPException(status_code=500, detail="Server failed to fetch today's sales.")


@router.post("/reset", response_model=SuccessResponse)
async def reset_today_sales(session=Depends(require_admin)):
    """Zeroes today's counters. Orders are left untouched."""
    try:
        row = await reset_today()
        log.warning(f"Today's sales reset by '{session.username}'.")
        return SuccessResponse(data=TodaySalesResponse(**row).model_dump(mode="json"))
    except Exception as e:
        log.error(f"Error resetting daily sales: {e}")
        raise HTTPException(status_code=500, detail="Server failed to reset daily sales.")


@report_router.get("", response_model=SuccessResponse, dependencies=[Depends(require_admin)])
async def get_sales_report(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
):
    """Revenue, order count, per-day breakdown and top items for a date range."""
    try:
        if not start_date or not end_date:
            raise HTTPException(status_code=400, detail="startDate and endDate parameters are required")
        report = await sales_report(start_date, end_date)
        return SuccessResponse(data=SalesReportResponse(**report).model_dump(mode="json"))
    except HTTPException:
        raise
    except ValueError as e:
        log.error(f"Value error generating sales report: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        log.error(f"Error generating sales report: {e}")
        raise HTTPException(status_code=500, detail="Server failed to generate sales report.")
