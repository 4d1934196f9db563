import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from tortoise import timezone
from tortoise.exceptions import IntegrityError
from tortoise.transactions import in_transaction

from cafe.core import business_day
from cafe.core.config import ORDER_NUMBER_ATTEMPTS, ORDER_NUMBER_WIDTH
from cafe.models.order import Order, OrderStatus
from cafe.schemas.order import OrderUpdate
from cafe.services.sales_service import open_sales_day, record_served_order

log = logging.getLogger("cafe.orders")


def calculate_order_total(items: Iterable[Dict[str, Any]]) -> Decimal:
    """Sum of price * quantity over the order lines."""
    return sum(
        (Decimal(str(item["price"])) * int(item["quantity"]) for item in items),
        Decimal("0"),
    )


def format_order_number(sequence: int) -> str:
    return str(sequence).zfill(ORDER_NUMBER_WIDTH)


def parse_status_filter(raw: Optional[str]) -> List[OrderStatus]:
    """
    Parses a comma separated status filter ('preparing,ready').
    Raises ValueError on values outside the OrderStatus enum.
    """
    if not raw:
        return []
    statuses = []
    for value in (part.strip() for part in raw.split(",")):
        if not value:
            continue
        try:
            statuses.append(OrderStatus(value))
        except ValueError:
            raise ValueError(f"Invalid status '{value}'. Allowed: {', '.join(s.value for s in OrderStatus)}.")
    return statuses


async def next_order_sequence(order_date: date, conn: Any = None) -> int:
    """Highest sequence used on ``order_date`` plus one."""
    last = await Order.filter(order_date=order_date).using_db(conn).order_by("-sequence").first()
    return (last.sequence if last else 0) + 1


async def place_order(items: List[Dict[str, Any]], total: Optional[Decimal] = None) -> Order:
    """
    Creates an order in the 'preparing' state with the next order number of
    the day. Two concurrent creates may pick the same number; the loser hits
    the (order_date, sequence) unique constraint and tries again.
    """
    if not items:
        raise ValueError("Order must contain items.")
    if total is None:
        total = calculate_order_total(items)

    order_date = await business_day.today()
    for attempt in range(1, ORDER_NUMBER_ATTEMPTS + 1):
        try:
            async with in_transaction() as conn:
                sequence = await next_order_sequence(order_date, conn)
                order = await Order.create(
                    order_number=format_order_number(sequence),
                    sequence=sequence,
                    order_date=order_date,
                    items=items,
                    total=total,
                    status=OrderStatus.PREPARING,
                    using_db=conn,
                )
            log.info(f"Order {order.order_number} ({order.id}) placed for {order_date}.")
            return order
        except IntegrityError:
            log.warning(f"Order number collision on {order_date} (attempt {attempt}/{ORDER_NUMBER_ATTEMPTS}).")

    raise RuntimeError(f"Could not allocate an order number for {order_date} after {ORDER_NUMBER_ATTEMPTS} attempts.")


async def get_order_by_id(order_id: UUID) -> Optional[Order]:
    return await Order.get_or_none(id=order_id)


async def list_orders(statuses: Optional[List[OrderStatus]] = None, include_served: bool = False) -> List[Order]:
    """
    Orders in queue order (oldest first). Served orders are hidden unless
    ``include_served`` is set. An explicit ``statuses`` list is applied as
    given and is not combined with the served exclusion, so ?status=served
    returns served orders without includeServed=true.
    """
    query = Order.all()
    if statuses:
        query = query.filter(status__in=list(statuses))
    elif not include_served:
        query = query.exclude(status=OrderStatus.SERVED)
    return await query.order_by("order_time", "order_date", "sequence")


async def update_order(order_id: UUID, patch: OrderUpdate) -> Optional[Order]:
    """
    Applies a partial update and returns the order, or None when it does not
    exist. Setting the status to 'served' credits the stored total to today's
    sales row inside the same transaction, so either both writes land or
    neither does. Serving an order that is already served credits it again.
    """
    sale_date = None
    if patch.status == OrderStatus.SERVED:
        # Counter row is created outside the transaction; the increment below is a plain UPDATE
        sale_date = await business_day.today()
        await open_sales_day(sale_date)

    async with in_transaction() as conn:
        order = await Order.get_or_none(id=order_id).using_db(conn)
        if not order:
            return None

        update_fields = ["updated_time"]
        if patch.items is not None:
            order.items = [item.model_dump(mode="json") for item in patch.items]
            update_fields.append("items")
        if patch.total is not None:
            order.total = Decimal(str(patch.total))
            update_fields.append("total")
        if patch.status is not None:
            order.status = patch.status
            update_fields.append("status")

        order.updated_time = timezone.now()
        await order.save(update_fields=update_fields, using_db=conn)

        if patch.status == OrderStatus.SERVED:
            await order.refresh_from_db(fields=["total"], using_db=conn)
            await record_served_order(sale_date, order.total, conn)

    log.info(f"Order {order.order_number} ({order.id}) updated: {', '.join(update_fields[1:])}.")
    return order


async def delete_order(order_id: UUID) -> bool:
    """Removes the order whatever its status. Daily sales are left as they are."""
    deleted = await Order.filter(id=order_id).delete()
    if deleted:
        log.info(f"Order {order_id} deleted.")
    return bool(deleted)
