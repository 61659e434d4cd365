from ..models.product import ProductDocument
from .base import MongoRepository


class ProductRepository(MongoRepository[ProductDocument]):
    """Products collection."""

    collection_name = "products"
    document_class = ProductDocument
