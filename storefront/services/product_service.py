"""
Product lifecycle: creation with uploaded images, lookup, field updates and
deletion with file cleanup.
"""
import logging
from typing import Any, Dict, Optional, Sequence

from ..exceptions import NotFound, ValidationError
from ..models.product import ProductCategory, ProductDocument
from ..repositories.base import DocumentRepository, validate_document
from ..schemas.product import CreateProductRequest, UpdateProductRequest
from .blob_store import StoredFile, discard_files
from .image_gallery import ImageGallery, check_capacity, images_from_uploads
from .variant_ledger import parse_size_variants, validate_size_variants

logger = logging.getLogger(__name__)

VALID_CATEGORIES = [category.value for category in ProductCategory]


def validate_category(category: Optional[str]) -> str:
    """Return the trimmed category, or raise ValidationError if it is not accepted."""
    value = (category or "").strip()
    if value not in VALID_CATEGORIES:
        raise ValidationError("Invalid category")
    return value


def _clean_text(value: Optional[str]) -> str:
    return value.strip() if isinstance(value, str) else ""


class ProductService:
    """Creates, fetches, updates and deletes products."""

    def __init__(self, products: DocumentRepository[ProductDocument], gallery: ImageGallery):
        self.products = products
        self.gallery = gallery

    async def create_product(self, request: CreateProductRequest, files: Sequence[StoredFile]) -> ProductDocument:
        """
        Validate the submitted fields and create a product from them.

        ``files`` were stored before validation; they become the product's
        images on success and are deleted on any failure.
        """
        try:
            title = _clean_text(request.title)
            description = _clean_text(request.description)
            if not title or not description:
                raise ValidationError("Title and description are required")

            variants = validate_size_variants(parse_size_variants(request.size_variants))
            category = validate_category(request.category)
            check_capacity(0, len(files))

            product = validate_document(ProductDocument, {
                "title": title,
                "description": description,
                "category": category,
                "sizeVariants": [variant.to_dict() for variant in variants],
                "images": [image.to_dict() for image in images_from_uploads(files)],
            })
            saved = await self.products.save(product)
        except Exception:
            discard_files(self.gallery.blob_store, [f.filename for f in files])
            raise

        logger.info(f"Product created: {saved.title} (ID: {saved.id})")
        return saved

    async def get_product(self, product_id: Optional[str]) -> ProductDocument:
        if not product_id:
            raise ValidationError("Product ID is required")
        product = await self.products.find_by_id(product_id)
        if product is None:
            raise NotFound("Product not found")
        return product

    async def update_product(self, request: UpdateProductRequest) -> ProductDocument:
        """Apply the non-empty fields of the request in a single document update."""
        existing = await self.get_product(request.id)

        update_doc: Dict[str, Any] = {}
        if _clean_text(request.title):
            update_doc["title"] = _clean_text(request.title)
        if _clean_text(request.description):
            update_doc["description"] = _clean_text(request.description)
        if request.category is not None and request.category.strip():
            update_doc["category"] = validate_category(request.category)
        if request.size_variants is not None:
            variants = validate_size_variants(parse_size_variants(request.size_variants))
            update_doc["sizeVariants"] = [variant.to_dict() for variant in variants]

        # Validate the merged document before anything is written
        validate_document(ProductDocument, {**existing.to_dict(), **update_doc})

        updated = await self.products.update_by_id(request.id, update_doc)
        if updated is None:
            raise NotFound("Product not found")

        logger.info(f"Product updated: {request.id}")
        return updated

    async def delete_product(self, product_id: Optional[str]) -> ProductDocument:
        """Delete the document first, then the files it referenced."""
        if not product_id:
            raise ValidationError("Product ID is required")

        product = await self.products.delete_by_id(product_id)
        if product is None:
            raise NotFound("Product not found")

        self.gallery.purge(product)
        logger.info(f"Product deleted: {product_id}")
        return product
