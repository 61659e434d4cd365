from .base import DocumentRepository, MongoRepository, validate_document
from .order_repository import OrderRepository
from .product_repository import ProductRepository

__all__ = [
    "DocumentRepository",
    "MongoRepository",
    "OrderRepository",
    "ProductRepository",
    "validate_document"
]
