"""
Image management for products.

Each image mutation pairs a document write with a blob store side effect.
The product document is the source of truth: it is written first and old
files are deleted afterwards, so a failure can leave an orphaned file but
never an image entry pointing at a missing file. Files uploaded for a
rejected request are removed before the error propagates.
"""
import logging
from typing import List, Sequence, Tuple

from ..exceptions import CapacityExceeded, NotFound, ValidationError
from ..models.base import utcnow
from ..models.product import MAX_PRODUCT_IMAGES, ProductDocument, ProductImage
from ..repositories.base import DocumentRepository
from .blob_store import BlobStore, StoredFile, discard_files

logger = logging.getLogger(__name__)


def check_capacity(current: int, incoming: int, max_images: int = MAX_PRODUCT_IMAGES) -> None:
    """Raise CapacityExceeded if ``current + incoming`` images would not fit."""
    if current + incoming > max_images:
        raise CapacityExceeded(
            f"Cannot add {incoming} images. Product currently has {current} images. Maximum is {max_images}."
        )


def images_from_uploads(files: Sequence[StoredFile]) -> List[ProductImage]:
    return [ProductImage(url=f.url, filename=f.filename) for f in files]


class ImageGallery:
    """Adds, replaces, removes and designates cover images of a product."""

    def __init__(self, products: DocumentRepository[ProductDocument], blob_store: BlobStore):
        self.products = products
        self.blob_store = blob_store

    async def _load(self, product_id: str) -> ProductDocument:
        product = await self.products.find_by_id(product_id)
        if product is None:
            raise NotFound("Product not found")
        return product

    async def add_images(
        self, product_id: str, files: Sequence[StoredFile]
    ) -> Tuple[ProductDocument, List[ProductImage]]:
        """
        Attach already uploaded files to a product.

        Returns:
            The saved product and the image entries that were added

        Raises:
            ValidationError: if no files were uploaded
            NotFound: if the product does not exist
            CapacityExceeded: if the product would hold more than 7 images
        """
        try:
            if not files:
                raise ValidationError("At least one image file is required")

            product = await self._load(product_id)
            check_capacity(len(product.images), len(files))

            added = images_from_uploads(files)
            product.images.extend(added)
            saved = await self.products.save(product)
        except Exception:
            discard_files(self.blob_store, [f.filename for f in files])
            raise

        logger.info(f"{len(added)} image(s) added to product {product_id}")
        return saved, added

    async def remove_image(self, product_id: str, image_id: str) -> Tuple[ProductDocument, ProductImage]:
        """Remove an image entry, then delete its file."""
        product = await self._load(product_id)
        image = product.get_image(image_id)
        if image is None:
            raise NotFound("Image not found")

        product.images = [img for img in product.images if img.id != image_id]
        saved = await self.products.save(product)

        discard_files(self.blob_store, [image.filename])
        logger.info(f"Image {image_id} removed from product {product_id}")
        return saved, image

    async def replace_image(
        self, product_id: str, image_id: str, new_file: StoredFile
    ) -> Tuple[ProductDocument, ProductImage]:
        """Point an existing image entry at a new file, keeping its id and cover flag."""
        try:
            product = await self._load(product_id)
            image = product.get_image(image_id)
            if image is None:
                raise NotFound("Image not found")

            old_filename = image.filename
            image.url = new_file.url
            image.filename = new_file.filename
            image.uploaded_at = utcnow()
            saved = await self.products.save(product)
        except Exception:
            discard_files(self.blob_store, [new_file.filename])
            raise

        discard_files(self.blob_store, [old_filename])
        logger.info(f"Image {image_id} replaced on product {product_id}")
        return saved, image

    async def set_cover(self, product_id: str, image_id: str) -> ProductDocument:
        """Make one image the cover; every other image loses the flag."""
        product = await self._load(product_id)
        if product.get_image(image_id) is None:
            raise NotFound("Image not found")

        for image in product.images:
            image.is_cover = image.id == image_id
        saved = await self.products.save(product)
        logger.info(f"Image {image_id} set as cover of product {product_id}")
        return saved

    def purge(self, product: ProductDocument) -> None:
        """Delete every file of a product that no longer exists."""
        discard_files(self.blob_store, [image.filename for image in product.images])
