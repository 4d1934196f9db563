"""
Zeroes the daily sales counters of today (in the configured café timezone),
or of the date given as the first argument (YYYY-MM-DD).

Meant to be run by hand or from cron, e.g.:

    0 0 * * * python -m cafe.scripts.reset_daily_sales
"""
import asyncio
import logging
import sys
from datetime import date
from cafe.core import business_day
from cafe.core.db import init_db, close_db
from cafe.services.sales_service import get_day, reset_day

log = logging.getLogger("cafe.reset_daily_sales")


async def main(argv):
    await init_db()
    try:
        sale_date = date.fromisoformat(argv[0]) if argv else await business_day.today()
        before = await get_day(sale_date)
        log.info(f"Before reset: {before['total_orders']} orders, {before['total_revenue']} revenue on {sale_date}.")
        await reset_day(sale_date)
    finally:
        await close_db()

if __name__ == "__main__":
    try:
        asyncio.run(main(sys.argv[1:]))
    except KeyboardInterrupt:
        log.info("Reset interrupted.")
