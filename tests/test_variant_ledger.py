"""Tests for size variant validation and management."""

import pytest

from storefront.exceptions import DuplicateSize, EmptyVariantList, InvalidVariant, NotFound
from storefront.models.product import SizeVariant
from storefront.schemas.product import SizeVariantUpdate
from storefront.services.variant_ledger import parse_size_variants, validate_size_variants

from .factories import make_product


class TestValidateSizeVariants:
    """Validation of candidate variant lists."""

    def test_empty_list_rejected(self):
        with pytest.raises(InvalidVariant, match="At least one size variant is required"):
            validate_size_variants([])

    def test_none_rejected(self):
        with pytest.raises(InvalidVariant):
            validate_size_variants(None)

    def test_unknown_size_rejected(self):
        with pytest.raises(InvalidVariant, match='Size must be either "Small" or "Large"'):
            validate_size_variants([{"size": "Medium", "price": 10}])

    @pytest.mark.parametrize("price", [None, "abc", -1, float("nan"), True])
    def test_bad_price_rejected(self, price):
        with pytest.raises(InvalidVariant, match="Valid price is required for size Small"):
            validate_size_variants([{"size": "Small", "price": price}])

    def test_duplicate_size_rejected(self):
        with pytest.raises(InvalidVariant, match="Duplicate size: Large"):
            validate_size_variants([
                {"size": "Large", "price": 20},
                {"size": "Small", "price": 10},
                {"size": "Large", "price": 25},
            ])

    def test_zero_price_accepted(self):
        [variant] = validate_size_variants([{"size": "Small", "price": 0}])
        assert variant.price == 0

    def test_numeric_strings_coerced(self):
        variants = validate_size_variants([
            {"size": "Small", "price": "12.50"},
            {"size": "Large", "price": 20, "isAvailable": False},
        ])
        assert [v.price for v in variants] == [12.5, 20.0]
        assert variants[0].is_available is True
        assert variants[1].is_available is False

    def test_fresh_ids_assigned(self):
        variants = validate_size_variants([{"size": "Small", "price": 1}, {"size": "Large", "price": 2}])
        assert variants[0].id != variants[1].id


class TestParseSizeVariants:

    def test_json_string(self):
        assert parse_size_variants('[{"size": "Small", "price": 5}]') == [{"size": "Small", "price": 5}]

    def test_list_passthrough(self):
        raw = [{"size": "Large", "price": 9}]
        assert parse_size_variants(raw) is raw

    @pytest.mark.parametrize("raw", ["not json", '{"size": "Small"}', None, 42])
    def test_unparseable_input_is_empty(self, raw):
        assert parse_size_variants(raw) == []


class TestVariantLedger:
    """Variant operations against a stored product."""

    @pytest.mark.asyncio
    async def test_add_variant(self, ledger, saved_product):
        product = await ledger.add_variant(saved_product.id, "Large", 20)

        sizes = [v.size for v in product.size_variants]
        assert sizes == ["Small", "Large"]
        assert product.size_variants[1].is_available is True

    @pytest.mark.asyncio
    async def test_add_duplicate_size(self, ledger, product_repo, saved_product):
        with pytest.raises(DuplicateSize, match="Size variant 'Small' already exists"):
            await ledger.add_variant(saved_product.id, "Small", 12)

        stored = product_repo.get(saved_product.id)
        assert len(stored.size_variants) == 1
        assert stored.size_variants[0].price == 10.0

    @pytest.mark.asyncio
    async def test_add_invalid_variant(self, ledger, saved_product):
        with pytest.raises(InvalidVariant):
            await ledger.add_variant(saved_product.id, "Huge", 12)

    @pytest.mark.asyncio
    async def test_add_to_missing_product(self, ledger):
        with pytest.raises(NotFound, match="Product not found"):
            await ledger.add_variant("64b7f0c2a1b2c3d4e5f60718", "Large", 12)

    @pytest.mark.asyncio
    async def test_replace_all_variants(self, ledger, saved_product):
        original_id = saved_product.size_variants[0].id

        product = await ledger.replace_all_variants(saved_product.id, [
            {"size": "Small", "price": 11},
            {"size": "Large", "price": 22},
        ])

        assert [(v.size, v.price) for v in product.size_variants] == [("Small", 11.0), ("Large", 22.0)]
        assert original_id not in {v.id for v in product.size_variants}

    @pytest.mark.asyncio
    async def test_replace_with_invalid_list_leaves_product_unchanged(self, ledger, product_repo, saved_product):
        with pytest.raises(InvalidVariant):
            await ledger.replace_all_variants(saved_product.id, [])

        stored = product_repo.get(saved_product.id)
        assert [v.size for v in stored.size_variants] == ["Small"]

    @pytest.mark.asyncio
    async def test_update_variant_keeps_id(self, ledger, saved_product):
        variant_id = saved_product.size_variants[0].id

        product = await ledger.update_variant(
            saved_product.id, variant_id, SizeVariantUpdate(price=14.5, is_available=False)
        )

        [variant] = product.size_variants
        assert variant.id == variant_id
        assert variant.size == "Small"
        assert variant.price == 14.5
        assert variant.is_available is False

    @pytest.mark.asyncio
    async def test_update_variant_to_taken_size(self, ledger, product_repo):
        product = product_repo.seed(make_product(size_variants=[
            SizeVariant(size="Small", price=10),
            SizeVariant(size="Large", price=20),
        ]))
        small_id = product.size_variants[0].id

        with pytest.raises(DuplicateSize):
            await ledger.update_variant(product.id, small_id, SizeVariantUpdate(size="Large"))

    @pytest.mark.asyncio
    async def test_update_missing_variant(self, ledger, saved_product):
        with pytest.raises(NotFound, match="Size variant not found"):
            await ledger.update_variant(saved_product.id, "nope", SizeVariantUpdate(price=1))

    @pytest.mark.asyncio
    async def test_remove_variant(self, ledger, product_repo):
        product = product_repo.seed(make_product(size_variants=[
            SizeVariant(size="Small", price=10),
            SizeVariant(size="Large", price=20),
        ]))

        updated = await ledger.remove_variant(product.id, product.size_variants[1].id)

        assert [v.size for v in updated.size_variants] == ["Small"]

    @pytest.mark.asyncio
    async def test_remove_last_variant(self, ledger, product_repo, saved_product):
        with pytest.raises(EmptyVariantList):
            await ledger.remove_variant(saved_product.id, saved_product.size_variants[0].id)

        assert len(product_repo.get(saved_product.id).size_variants) == 1

    @pytest.mark.asyncio
    async def test_remove_missing_variant(self, ledger, saved_product):
        with pytest.raises(NotFound):
            await ledger.remove_variant(saved_product.id, "missing")
