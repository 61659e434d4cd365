from ..models.order import OrderDocument
from .base import MongoRepository


class OrderRepository(MongoRepository[OrderDocument]):
    """Orders collection."""

    collection_name = "orders"
    document_class = OrderDocument
