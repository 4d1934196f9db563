from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from cafe.models.order import OrderStatus
from cafe.models.sales import DailySale
from cafe.schemas.order import OrderUpdate
from cafe.services.order_service import place_order, update_order
from cafe.services.sales_service import (
    get_day,
    list_daily_sales,
    open_sales_day,
    rank_top_items,
    record_served_order,
    reset_day,
    sales_report,
)

DAY = date(2026, 10, 18)


def test_top_items_ranked_by_quantity():
    orders = [
        SimpleNamespace(items=[{"name": "Tea", "price": 20, "quantity": 2}, {"name": "Samosa", "price": 15, "quantity": 1}]),
        SimpleNamespace(items=[{"name": "Samosa", "price": 15, "quantity": 4}]),
        SimpleNamespace(items=[{"name": "Coffee", "price": 30, "quantity": 2}]),
    ]
    ranked = rank_top_items(orders, limit=2)

    assert [r["name"] for r in ranked] == ["Samosa", "Coffee"]
    assert ranked[0]["quantity"] == 5
    assert ranked[0]["revenue"] == Decimal("75")


async def test_first_served_order_creates_the_row(db):
    await record_served_order(DAY, Decimal("40"))

    row = await DailySale.get(sale_date=DAY)
    assert row.total_orders == 1
    assert row.total_revenue == Decimal("40")


async def test_later_served_orders_increment(db):
    await record_served_order(DAY, Decimal("40"))
    await record_served_order(DAY, Decimal("12.50"))

    row = await DailySale.get(sale_date=DAY)
    assert row.total_orders == 2
    assert row.total_revenue == Decimal("52.50")
    assert await DailySale.all().count() == 1


async def test_opening_a_day_creates_one_zero_row(db):
    first = await open_sales_day(DAY)
    await record_served_order(DAY, Decimal("40"))
    again = await open_sales_day(DAY)

    assert first.id == again.id
    assert first.total_orders == 0
    assert again.total_orders == 1
    assert await DailySale.all().count() == 1


async def test_missing_day_reads_as_zero(db):
    day = await get_day(DAY)
    assert day["total_orders"] == 0
    assert day["total_revenue"] == 0


async def test_reset_zeroes_counters_only(db):
    order = await place_order([{"id": 1, "name": "Tea", "price": 20, "quantity": 1}])
    await update_order(order.id, OrderUpdate(status=OrderStatus.SERVED))
    sale_date = (await DailySale.first()).sale_date

    await reset_day(sale_date)

    row = await DailySale.get(sale_date=sale_date)
    assert row.total_orders == 0
    assert row.total_revenue == 0
    # The served order itself is untouched
    await order.refresh_from_db()
    assert order.status == OrderStatus.SERVED


async def test_daily_rows_are_listed_newest_first(db):
    for day in (date(2026, 10, 16), date(2026, 10, 18), date(2026, 10, 17)):
        await record_served_order(day, Decimal("10"))

    rows = await list_daily_sales()
    assert [r.sale_date.day for r in rows] == [18, 17, 16]

    rows = await list_daily_sales(date(2026, 10, 17), date(2026, 10, 17))
    assert [r.sale_date.day for r in rows] == [17]


async def test_report_reads_rolling_counters(db):
    await record_served_order(date(2026, 10, 16), Decimal("40"))
    await record_served_order(date(2026, 10, 17), Decimal("20"))
    await record_served_order(date(2026, 10, 17), Decimal("30"))
    await record_served_order(date(2026, 10, 20), Decimal("99"))

    report = await sales_report(date(2026, 10, 16), date(2026, 10, 18))

    assert report["total_orders"] == 3
    assert report["total_revenue"] == Decimal("90")
    assert [(d["date"].day, d["orders"]) for d in report["daily_sales"]] == [(17, 2), (16, 1)]


async def test_report_rejects_inverted_range(db):
    with pytest.raises(ValueError):
        await sales_report(date(2026, 10, 18), date(2026, 10, 1))
