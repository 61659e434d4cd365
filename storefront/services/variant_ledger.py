"""
Size variant management for products.

Every operation loads the product aggregate, changes its ``sizeVariants``
in memory and writes the document back. Sizes stay unique within a product
and a product never ends up without variants.
"""
import json
import logging
import math
from typing import Any, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError as SchemaValidationError

from ..exceptions import DuplicateSize, EmptyVariantList, InvalidVariant, NotFound
from ..models.product import ProductDocument, ProductSize, SizeVariant
from ..repositories.base import DocumentRepository
from ..schemas.product import SizeVariantInput, SizeVariantUpdate

logger = logging.getLogger(__name__)

VALID_SIZES = [size.value for size in ProductSize]

VariantLike = Union[SizeVariantInput, Mapping[str, Any]]


def parse_size_variants(raw: Any) -> List[Any]:
    """
    Accept size variants as a list or as a JSON encoded list.

    Multipart forms carry the list as a string; anything that does not parse
    to a list yields an empty list so validation reports it.
    """
    if isinstance(raw, list):
        return raw
    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except ValueError:
            logger.warning(f"Could not parse size variants: {raw!r}")
            return []
        return parsed if isinstance(parsed, list) else []
    return []


def _coerce_price(value: Any, size: str) -> float:
    message = f"Valid price is required for size {size}"
    if value is None or isinstance(value, bool):
        raise InvalidVariant(message)
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise InvalidVariant(message)
    if math.isnan(price) or math.isinf(price) or price < 0:
        raise InvalidVariant(message)
    return price


def _as_input(raw: Any) -> SizeVariantInput:
    if isinstance(raw, SizeVariantInput):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidVariant("Each size variant must be an object with size and price")
    try:
        return SizeVariantInput.model_validate(raw)
    except SchemaValidationError as e:
        raise InvalidVariant("Invalid size variant", detail=str(e))


def validate_size_variants(variants: Optional[Sequence[VariantLike]]) -> List[SizeVariant]:
    """
    Validate a candidate variant list and build fresh variants from it.

    Raises:
        InvalidVariant: if the list is empty, a size is not Small/Large, a
            price is missing, non-numeric or negative, or a size repeats
    """
    if not isinstance(variants, (list, tuple)) or not variants:
        raise InvalidVariant("At least one size variant is required")

    validated: List[SizeVariant] = []
    seen = set()
    for raw in variants:
        candidate = _as_input(raw)
        if candidate.size not in VALID_SIZES:
            raise InvalidVariant('Size must be either "Small" or "Large"')

        price = _coerce_price(candidate.price, candidate.size)

        if candidate.size in seen:
            raise InvalidVariant(f"Duplicate size: {candidate.size}")
        seen.add(candidate.size)

        validated.append(SizeVariant(
            size=candidate.size,
            price=price,
            is_available=candidate.is_available is not False,
        ))
    return validated


class VariantLedger:
    """Adds, edits, replaces and removes the size variants of a product."""

    def __init__(self, products: DocumentRepository[ProductDocument]):
        self.products = products

    async def _load(self, product_id: str) -> ProductDocument:
        product = await self.products.find_by_id(product_id)
        if product is None:
            raise NotFound("Product not found")
        return product

    async def add_variant(
        self,
        product_id: str,
        size: str,
        price: Any,
        stock: int = 0,
        is_available: bool = True,
    ) -> ProductDocument:
        """Append a variant; ``stock`` is accepted for API compatibility only."""
        product = await self._load(product_id)
        [variant] = validate_size_variants([{"size": size, "price": price, "isAvailable": is_available}])

        if any(existing.size == variant.size for existing in product.size_variants):
            raise DuplicateSize(f"Size variant '{variant.size}' already exists")

        product.size_variants.append(variant)
        saved = await self.products.save(product)
        logger.info(f"Size variant '{variant.size}' added to product {product_id}")
        return saved

    async def replace_all_variants(self, product_id: str, variants: Sequence[VariantLike]) -> ProductDocument:
        """Swap the whole variant list in one document update; new ids are assigned."""
        await self._load(product_id)
        validated = validate_size_variants(variants)

        updated = await self.products.update_by_id(
            product_id,
            {"sizeVariants": [variant.to_dict() for variant in validated]},
        )
        if updated is None:
            raise NotFound("Product not found")

        logger.info(f"Size variants replaced on product {product_id} ({len(validated)} variant(s))")
        return updated

    async def update_variant(self, product_id: str, variant_id: str, update: SizeVariantUpdate) -> ProductDocument:
        """Edit one variant in place, keeping its id."""
        product = await self._load(product_id)
        variant = product.get_variant(variant_id)
        if variant is None:
            raise NotFound("Size variant not found")

        candidate = {
            "size": update.size if update.size is not None else variant.size,
            "price": update.price if update.price is not None else variant.price,
            "isAvailable": update.is_available if update.is_available is not None else variant.is_available,
        }
        [checked] = validate_size_variants([candidate])

        if any(other.size == checked.size for other in product.size_variants if other.id != variant_id):
            raise DuplicateSize(f"Size variant '{checked.size}' already exists")

        variant.size = checked.size
        variant.price = checked.price
        variant.is_available = checked.is_available
        saved = await self.products.save(product)
        logger.info(f"Size variant {variant_id} updated on product {product_id}")
        return saved

    async def remove_variant(self, product_id: str, variant_id: str) -> ProductDocument:
        product = await self._load(product_id)
        if product.get_variant(variant_id) is None:
            raise NotFound("Size variant not found")

        if len(product.size_variants) == 1:
            raise EmptyVariantList("Cannot remove the last size variant of a product")

        product.size_variants = [v for v in product.size_variants if v.id != variant_id]
        saved = await self.products.save(product)
        logger.info(f"Size variant {variant_id} removed from product {product_id}")
        return saved
