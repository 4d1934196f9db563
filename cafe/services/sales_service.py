"""
Daily sales accounting.

The ``daily_sales`` rows are the only source of revenue figures: they are
incremented by ``record_served_order`` when an order is served and every
report reads them back. They are never recomputed from the orders table, so
deleting or editing a served order does not change them.
"""
import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from tortoise.exceptions import IntegrityError
from tortoise.expressions import F

from cafe.core import business_day
from cafe.core.config import TOP_ITEMS_LIMIT
from cafe.models.order import Order, OrderStatus
from cafe.models.sales import DailySale

log = logging.getLogger("cafe.sales")


async def record_served_order(sale_date: date, amount: Decimal, conn: Any = None) -> None:
    """
    Adds one served order of ``amount`` to the ``sale_date`` row, creating it
    when absent. Pass the caller's transaction as ``conn`` so the increment
    commits together with the status change; call ``open_sales_day`` before
    that transaction so the row already exists. Calling it twice counts twice.
    """
    updated = await DailySale.filter(sale_date=sale_date).using_db(conn).update(
        total_orders=F("total_orders") + 1,
        total_revenue=F("total_revenue") + amount,
    )
    if not updated:
        await DailySale.create(sale_date=sale_date, total_orders=1, total_revenue=amount, using_db=conn)
    log.info(f"Recorded served order of {amount} for {sale_date}.")


async def open_sales_day(sale_date: date) -> DailySale:
    """
    Returns the counter row of ``sale_date``, creating a zero row when there
    is none. Two callers racing on a new day end up with the same row.
    """
    row = await DailySale.get_or_none(sale_date=sale_date)
    if row:
        return row
    try:
        return await DailySale.create(sale_date=sale_date, total_orders=0, total_revenue=Decimal("0"))
    except IntegrityError:
        log.info(f"Sales row for {sale_date} created concurrently; reusing it.")
        return await DailySale.get(sale_date=sale_date)


async def get_day(sale_date: date) -> Dict[str, Any]:
    """Counters for one day; zeros when nothing was served."""
    row = await DailySale.get_or_none(sale_date=sale_date)
    if not row:
        return {"sale_date": sale_date, "total_orders": 0, "total_revenue": Decimal("0")}
    return {"sale_date": row.sale_date, "total_orders": row.total_orders, "total_revenue": row.total_revenue}


async def get_today() -> Dict[str, Any]:
    return await get_day(await business_day.today())


async def list_daily_sales(start: Optional[date] = None, end: Optional[date] = None) -> List[DailySale]:
    query = DailySale.all()
    if start:
        query = query.filter(sale_date__gte=start)
    if end:
        query = query.filter(sale_date__lte=end)
    return await query.order_by("-sale_date")


async def reset_day(sale_date: date) -> Dict[str, Any]:
    """Zeroes the counters of one day. Orders are not touched."""
    updated = await DailySale.filter(sale_date=sale_date).update(total_orders=0, total_revenue=Decimal("0"))
    log.warning(f"Daily sales for {sale_date} reset ({updated} row(s)).")
    return {"sale_date": sale_date, "total_orders": 0, "total_revenue": Decimal("0")}


async def reset_today() -> Dict[str, Any]:
    return await reset_day(await business_day.today())


def rank_top_items(orders: List[Order], limit: int = TOP_ITEMS_LIMIT) -> List[Dict[str, Any]]:
    """Sums quantity and revenue per item name over the orders' line items."""
    quantity: Dict[str, int] = defaultdict(int)
    revenue: Dict[str, Decimal] = defaultdict(Decimal)
    for order in orders:
        for line in order.items or []:
            name = line.get("name")
            if not name:
                continue
            qty = int(line.get("quantity", 0))
            quantity[name] += qty
            revenue[name] += Decimal(str(line.get("price", 0))) * qty

    ranked = sorted(quantity, key=lambda n: (-quantity[n], -revenue[n], n))
    return [{"name": n, "quantity": quantity[n], "revenue": revenue[n]} for n in ranked[:limit]]


async def sales_report(start: date, end: date) -> Dict[str, Any]:
    """
    Revenue and order counts for an inclusive date range, read from the daily
    rows, plus the best-selling items among the served orders of the range.
    """
    if start > end:
        raise ValueError("startDate must not be after endDate.")

    rows = await list_daily_sales(start, end)
    served = await Order.filter(status=OrderStatus.SERVED, order_date__gte=start, order_date__lte=end)

    return {
        "start_date": start,
        "end_date": end,
        "total_orders": sum(r.total_orders for r in rows),
        "total_revenue": sum((r.total_revenue for r in rows), Decimal("0")),
        "daily_sales": [
            {"date": r.sale_date, "orders": r.total_orders, "revenue": r.total_revenue}
            for r in rows
        ],
        "top_items": rank_top_items(served),
    }
