"""
Order endpoints, including the legacy paths used by the storefront checkout.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..config.settings import get_settings
from ..exceptions import StorageError, StorefrontError
from ..schemas.common import OrderPaginationMeta, SuccessResponse
from ..schemas.order import (
    CreateOrderRequest,
    OrderItemRequest,
    OrderResponse,
    OrdersListResponse,
    OrdersPage,
    OrderStatsResponse,
    UpdateOrderItemRequest,
    UpdateOrderRequest,
)
from ..services.order_service import OrderService
from ..utils.dependencies import get_order_service, validate_object_id

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Orders"])


@router.get("/orders/stats", response_model=OrderStatsResponse)
@router.get("/stats", response_model=OrderStatsResponse)
async def get_order_stats(orders: OrderService = Depends(get_order_service)):
    """Revenue overview, recent orders and a six month breakdown"""
    try:
        stats = await orders.get_stats()
        return OrderStatsResponse(data=stats)
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to compute order stats: {str(e)}")
        raise StorageError("Error fetching order statistics", detail=str(e))


@router.get("/orders", response_model=OrdersListResponse)
@router.get("/ALlOrders", response_model=OrdersListResponse)
async def list_orders(
    page: int = Query(1, ge=1, description="Page number"),
    limit: Optional[int] = Query(None, ge=1, le=get_settings().max_page_size, description="Orders per page"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="Sort field"),
    sort_order: Optional[str] = Query(None, alias="sortOrder", description="asc or desc"),
    orders: OrderService = Depends(get_order_service),
):
    """List orders with pagination, newest first by default"""
    try:
        result = await orders.list_orders(page, limit, sort_by, sort_order)
        return OrdersListResponse(
            data=OrdersPage(
                orders=result.items,
                pagination=OrderPaginationMeta(
                    current_page=result.page,
                    total_pages=result.pages,
                    total_count=result.total,
                    has_next_page=result.has_next,
                    has_prev_page=result.has_prev,
                    limit=result.limit,
                ),
            )
        )
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch orders: {str(e)}")
        raise StorageError("Error fetching orders", detail=str(e))


@router.post("/orders", status_code=201, response_model=OrderResponse)
@router.post("/Order", status_code=201, response_model=OrderResponse)
async def create_order(
    request: CreateOrderRequest,
    orders: OrderService = Depends(get_order_service),
):
    """Create a new order; the total is computed from the items"""
    try:
        order = await orders.create_order(request)
        return OrderResponse(message="Order created successfully", data=order)
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to create order: {str(e)}")
        raise StorageError("Error creating order", detail=str(e))


@router.get("/orders/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, orders: OrderService = Depends(get_order_service)):
    try:
        order = await orders.get_order(validate_object_id(order_id, "order"))
        return OrderResponse(data=order)
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch order {order_id}: {str(e)}")
        raise StorageError("Error fetching order", detail=str(e))


@router.put("/orders/{order_id}", response_model=OrderResponse)
async def update_order(
    order_id: str,
    request: UpdateOrderRequest,
    orders: OrderService = Depends(get_order_service),
):
    """Replace every item of an order"""
    try:
        order = await orders.update_order(validate_object_id(order_id, "order"), request)
        return OrderResponse(message="Order updated successfully", data=order)
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to update order {order_id}: {str(e)}")
        raise StorageError("Error updating order", detail=str(e))


@router.delete("/orders/{order_id}", response_model=SuccessResponse)
async def delete_order(order_id: str, orders: OrderService = Depends(get_order_service)):
    try:
        await orders.delete_order(validate_object_id(order_id, "order"))
        return SuccessResponse(message="Order deleted successfully")
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to delete order {order_id}: {str(e)}")
        raise StorageError("Error deleting order", detail=str(e))


@router.post("/orders/{order_id}/items", status_code=201, response_model=OrderResponse)
async def add_order_item(
    order_id: str,
    item: OrderItemRequest,
    orders: OrderService = Depends(get_order_service),
):
    try:
        order = await orders.add_item(validate_object_id(order_id, "order"), item)
        return OrderResponse(message="Item added to order successfully", data=order)
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to add item to order {order_id}: {str(e)}")
        raise StorageError("Error adding item to order", detail=str(e))


@router.put("/orders/{order_id}/items/{item_id}", response_model=OrderResponse)
async def update_order_item(
    order_id: str,
    item_id: str,
    update: UpdateOrderItemRequest,
    orders: OrderService = Depends(get_order_service),
):
    try:
        order = await orders.update_item(validate_object_id(order_id, "order"), item_id, update)
        return OrderResponse(message="Order item updated successfully", data=order)
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to update item {item_id} of order {order_id}: {str(e)}")
        raise StorageError("Error updating order item", detail=str(e))


@router.delete("/orders/{order_id}/items/{item_id}", response_model=OrderResponse)
async def remove_order_item(
    order_id: str,
    item_id: str,
    orders: OrderService = Depends(get_order_service),
):
    """Remove one item; the last item of an order can not be removed"""
    try:
        order = await orders.remove_item(validate_object_id(order_id, "order"), item_id)
        return OrderResponse(message="Item removed from order successfully", data=order)
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to remove item {item_id} from order {order_id}: {str(e)}")
        raise StorageError("Error removing item from order", detail=str(e))
