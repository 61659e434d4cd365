"""Order total derivation and item removal."""

from ..exceptions import EmptyOrder, NotFound
from ..models.order import OrderDocument


def recompute_total(order: OrderDocument) -> float:
    """Set and return ``total_cart_price`` as the sum of price x quantity."""
    order.total_cart_price = sum(item.line_total for item in order.items)
    return order.total_cart_price


def remove_item(order: OrderDocument, item_id: str) -> OrderDocument:
    """
    Remove an item and recompute the total.

    The last item can not be removed; the order is left untouched in that case.
    """
    if order.get_item(item_id) is None:
        raise NotFound("Item not found in order")
    if len(order.items) == 1:
        raise EmptyOrder("Cannot remove all items from order")

    order.items = [item for item in order.items if item.id != item_id]
    recompute_total(order)
    return order
