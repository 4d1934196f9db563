from pydantic import BaseModel, ConfigDict
from typing import List
from datetime import date

from cafe.schemas.response import Money


class DailySaleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    sale_date: date
    total_orders: int
    total_revenue: Money


class TodaySalesResponse(BaseModel):
    sale_date: date
    total_orders: int = 0
    total_revenue: Money = 0


class DailyBreakdown(BaseModel):
    date: date
    orders: int
    revenue: Money


class TopItem(BaseModel):
    name: str
    quantity: int
    revenue: Money


class SalesReportResponse(BaseModel):
    start_date: date
    end_date: date
    total_orders: int
    total_revenue: Money
    daily_sales: List[DailyBreakdown]
    top_items: List[TopItem]
