"""
Order capture and maintenance.

Every mutation calls ``recompute_total`` right before the order is written,
so a stored order always carries the total of its current items.
"""
import calendar
import logging
from datetime import datetime
from typing import List, Optional, Sequence

from pymongo import DESCENDING

from ..exceptions import NotFound, ValidationError
from ..models.base import utcnow
from ..models.order import OrderDocument, OrderItemDocument
from ..repositories.base import DocumentRepository, validate_document
from ..schemas.order import (
    CreateOrderRequest,
    MonthlyOrderStats,
    OrderItemRequest,
    OrderStats,
    OrderStatsOverview,
    UpdateOrderItemRequest,
    UpdateOrderRequest,
)
from . import order_totals
from .catalog_query import Page, build_sort, fetch_page

logger = logging.getLogger(__name__)

ORDER_SORT_FIELDS = ("createdAt", "updatedAt", "totalCartPrice", "orderId")
RECENT_ORDERS_LIMIT = 5
STATS_MONTHS = 6


def months_before(moment: datetime, months: int) -> datetime:
    """Same day and time ``months`` calendar months earlier, clamped to month end."""
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def build_items(items: Sequence[OrderItemRequest]) -> List[OrderItemDocument]:
    if not items:
        raise ValidationError("Items are required")
    return [validate_document(OrderItemDocument, item.to_dict()) for item in items]


class OrderService:
    """Creates, lists, edits and summarises orders."""

    def __init__(self, orders: DocumentRepository[OrderDocument], default_limit: int = 20):
        self.orders = orders
        self.default_limit = default_limit

    async def _load(self, order_id: str) -> OrderDocument:
        order = await self.orders.find_by_id(order_id)
        if order is None:
            raise NotFound("Order not found")
        return order

    async def create_order(self, request: CreateOrderRequest) -> OrderDocument:
        order = OrderDocument(items=build_items(request.items))
        order_totals.recompute_total(order)
        saved = await self.orders.save(order)
        logger.info(f"Order created: {saved.order_id} (ID: {saved.id})")
        return saved

    async def list_orders(
        self,
        page: int = 1,
        limit: Optional[int] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> Page:
        sort = build_sort(sort_by, sort_order, ORDER_SORT_FIELDS)
        return await fetch_page(self.orders, {}, page, limit or self.default_limit, sort)

    async def get_order(self, order_id: str) -> OrderDocument:
        return await self._load(order_id)

    async def update_order(self, order_id: str, request: UpdateOrderRequest) -> OrderDocument:
        """Replace every item of an order."""
        items = build_items(request.items)
        order = await self._load(order_id)
        order.items = items
        order_totals.recompute_total(order)
        saved = await self.orders.save(order)
        logger.info(f"Order updated: {order_id}")
        return saved

    async def delete_order(self, order_id: str) -> OrderDocument:
        order = await self.orders.delete_by_id(order_id)
        if order is None:
            raise NotFound("Order not found")
        logger.info(f"Order deleted: {order_id}")
        return order

    async def add_item(self, order_id: str, item: OrderItemRequest) -> OrderDocument:
        order = await self._load(order_id)
        order.items.append(validate_document(OrderItemDocument, item.to_dict()))
        order_totals.recompute_total(order)
        saved = await self.orders.save(order)
        logger.info(f"Item added to order {order_id}")
        return saved

    async def remove_item(self, order_id: str, item_id: str) -> OrderDocument:
        order = await self._load(order_id)
        order_totals.remove_item(order, item_id)
        saved = await self.orders.save(order)
        logger.info(f"Item {item_id} removed from order {order_id}")
        return saved

    async def update_item(self, order_id: str, item_id: str, update: UpdateOrderItemRequest) -> OrderDocument:
        order = await self._load(order_id)
        item = order.get_item(item_id)
        if item is None:
            raise NotFound("Item not found in order")

        changes = update.model_dump(by_alias=True, exclude_none=True)
        updated_item = validate_document(OrderItemDocument, {**item.to_dict(), **changes})
        order.items = [updated_item if i.id == item_id else i for i in order.items]
        order_totals.recompute_total(order)
        saved = await self.orders.save(order)
        logger.info(f"Item {item_id} updated in order {order_id}")
        return saved

    async def get_stats(self, now: Optional[datetime] = None) -> OrderStats:
        """Totals, average order value, recent orders and a six month breakdown."""
        now = now or utcnow()

        total_orders = await self.orders.count({})
        revenue_rows = await self.orders.aggregate([
            {"$group": {"_id": None, "total": {"$sum": "$totalCartPrice"}}},
        ])
        total_revenue = revenue_rows[0]["total"] if revenue_rows else 0
        avg_order_value = round(total_revenue / total_orders, 2) if total_orders else 0

        recent_orders = await self.orders.find(
            {}, sort=[("createdAt", DESCENDING)], limit=RECENT_ORDERS_LIMIT
        )

        monthly_rows = await self.orders.aggregate([
            {"$match": {"createdAt": {"$gte": months_before(now, STATS_MONTHS)}}},
            {"$group": {
                "_id": {"year": {"$year": "$createdAt"}, "month": {"$month": "$createdAt"}},
                "totalOrders": {"$sum": 1},
                "totalRevenue": {"$sum": "$totalCartPrice"},
            }},
            {"$sort": {"_id.year": 1, "_id.month": 1}},
        ])

        return OrderStats(
            overview=OrderStatsOverview(
                total_orders=total_orders,
                total_revenue=total_revenue,
                avg_order_value=avg_order_value,
            ),
            recent_orders=recent_orders,
            monthly_stats=[
                MonthlyOrderStats(
                    year=row["_id"]["year"],
                    month=row["_id"]["month"],
                    total_orders=row["totalOrders"],
                    total_revenue=row["totalRevenue"],
                )
                for row in monthly_rows
            ],
        )
