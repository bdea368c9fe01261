"""Order placement"""

from typing import List, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError, ValidationError
from app.models.order import Order, OrderItem, OrderStatus
from app.repositories import menu_items as menu_items_repo
from app.repositories import orders as orders_repo
from app.tenancy.binder import require_bound_context

logger = structlog.get_logger()


async def place_order(
    db: AsyncSession,
    lines: List[dict],
    user_id: Optional[int] = None,
    customer_name: Optional[str] = None,
    customer_phone: Optional[str] = None,
    notes: Optional[str] = None,
) -> Order:
    """
    Create an order in the bound restaurant.

    Each line is ``{"menu_item_id", "quantity", "notes"}``. Prices are taken
    from the menu at the time of ordering and the total is their sum.

    Raises:
        ValidationError: no lines, or an item is not available
        NotFoundError: an item does not exist in this restaurant
    """
    if not lines:
        raise ValidationError("Order must contain at least one item")

    menu_items = await menu_items_repo.get_menu_items_by_ids(db, (line["menu_item_id"] for line in lines))

    order_items = []
    total = 0.0
    for line in lines:
        menu_item = menu_items.get(line["menu_item_id"])
        if menu_item is None:
            raise NotFoundError("Menu item not found")
        if not menu_item.is_available:
            raise ValidationError(f"Menu item is not available: {menu_item.name}")

        quantity = line["quantity"]
        total += menu_item.price * quantity
        order_items.append(
            OrderItem(
                menu_item_id=menu_item.id,
                quantity=quantity,
                price=menu_item.price,
                notes=line.get("notes"),
            )
        )

    order = await orders_repo.create_order(
        db,
        Order(
            user_id=user_id,
            customer_name=customer_name,
            customer_phone=customer_phone,
            status=OrderStatus.PENDING.value,
            total_amount=round(total, 2),
            notes=notes,
        ),
        order_items,
    )
    logger.info(
        "Order placed",
        restaurant_id=require_bound_context(db).restaurant_id,
        order_id=order.id,
        total_amount=order.total_amount,
        item_count=len(order_items),
    )
    return order


async def update_order_status(db: AsyncSession, order_id: int, status: OrderStatus) -> Order:
    order = await orders_repo.get_order(db, order_id)
    if order is None:
        raise NotFoundError("Order not found")
    order.status = status.value
    await db.flush()
    return order
