"""
FastAPI dependencies for repositories, services and common validations
"""
from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId
import logging

from ..config.database import get_database
from ..config.settings import Settings, get_settings
from ..core.security import CredentialVerifier
from ..exceptions import ValidationError
from ..repositories import OrderRepository, ProductRepository
from ..services.blob_store import BlobStore, LocalBlobStore
from ..services.catalog_query import CatalogQuery
from ..services.image_gallery import ImageGallery
from ..services.order_service import OrderService
from ..services.product_service import ProductService
from ..services.variant_ledger import VariantLedger

logger = logging.getLogger(__name__)


def validate_object_id(object_id: str, resource_name: str = "resource") -> str:
    """
    Validate an ObjectId string

    Args:
        object_id: String representation of ObjectId
        resource_name: Name of the resource for error messages

    Returns:
        The id, unchanged

    Raises:
        ValidationError: If ObjectId format is invalid
    """
    if not ObjectId.is_valid(object_id):
        raise ValidationError(f"Invalid {resource_name} ID format: {object_id}")
    return object_id


async def get_product_repository(db: AsyncIOMotorDatabase = Depends(get_database)) -> ProductRepository:
    return ProductRepository(db)


async def get_order_repository(db: AsyncIOMotorDatabase = Depends(get_database)) -> OrderRepository:
    return OrderRepository(db)


def get_blob_store(settings: Settings = Depends(get_settings)) -> BlobStore:
    """Local image storage under the configured uploads directory."""
    return LocalBlobStore(settings.product_upload_path, settings.product_image_url_prefix)


def get_variant_ledger(products: ProductRepository = Depends(get_product_repository)) -> VariantLedger:
    return VariantLedger(products)


def get_image_gallery(
    products: ProductRepository = Depends(get_product_repository),
    blob_store: BlobStore = Depends(get_blob_store),
) -> ImageGallery:
    return ImageGallery(products, blob_store)


def get_product_service(
    products: ProductRepository = Depends(get_product_repository),
    gallery: ImageGallery = Depends(get_image_gallery),
) -> ProductService:
    return ProductService(products, gallery)


def get_catalog_query(
    products: ProductRepository = Depends(get_product_repository),
    settings: Settings = Depends(get_settings),
) -> CatalogQuery:
    return CatalogQuery(products, default_limit=settings.default_page_size)


def get_order_service(
    orders: OrderRepository = Depends(get_order_repository),
    settings: Settings = Depends(get_settings),
) -> OrderService:
    return OrderService(orders, default_limit=settings.default_order_page_size)


def get_credential_verifier(settings: Settings = Depends(get_settings)) -> CredentialVerifier:
    return CredentialVerifier(settings.admin_email, settings.admin_password)
