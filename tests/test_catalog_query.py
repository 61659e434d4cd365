"""Tests for catalog filters, sorting and pagination."""

import re

import pytest
from pymongo import ASCENDING, DESCENDING

from storefront.exceptions import NotFound, ValidationError
from storefront.models.product import SizeVariant
from storefront.services.catalog_query import (
    Page,
    build_product_filter,
    build_sort,
    search_clause,
    valid_options,
)

from .factories import make_product


def test_price_range_matches_within_one_variant():
    filter_query = build_product_filter(min_price=10, max_price=20)

    assert filter_query == {"sizeVariants": {"$elemMatch": {"price": {"$gte": 10, "$lte": 20}}}}


def test_filter_combines_category_and_search():
    filter_query = build_product_filter(category="Dark Desire", search="choc")

    assert filter_query["category"] == "Dark Desire"
    assert len(filter_query["$or"]) == 3


def test_blank_search_is_ignored():
    assert build_product_filter(search="   ") == {}


def test_search_text_is_escaped():
    clause = search_clause("a+b (x)")

    pattern = clause["$or"][0]["title"]["$regex"]
    assert re.search(pattern, "cake a+b (x) deluxe")
    assert not re.search(pattern, "aab x")


def test_sort_whitelist():
    assert build_sort("title", "asc", ("title", "createdAt")) == [("title", ASCENDING)]
    assert build_sort("password", "asc", ("title", "createdAt")) == [("createdAt", ASCENDING)]
    assert build_sort(None, None, ("title",)) == [("createdAt", DESCENDING)]


def test_page_arithmetic():
    page = Page(items=[], page=2, limit=10, total=25)

    assert page.pages == 3
    assert page.has_next
    assert page.has_prev


def test_valid_options():
    categories, sizes = valid_options()

    assert "Vanilla Lust" in categories
    assert sizes == ["Small", "Large"]


@pytest.fixture
def catalog_products(product_repo):
    return [
        product_repo.seed(make_product(
            title="Strawberry Dream",
            category="Strawberry Flavour",
            size_variants=[SizeVariant(size="Small", price=5), SizeVariant(size="Large", price=30)],
        )),
        product_repo.seed(make_product(
            title="Midnight Cocoa",
            description="Dark chocolate layers",
            category="Dark Desire",
            size_variants=[SizeVariant(size="Small", price=15)],
        )),
        product_repo.seed(make_product(
            title="Vanilla Bean",
            description="Madagascar vanilla",
            category="Vanilla Lust",
            size_variants=[SizeVariant(size="Large", price=50)],
        )),
    ]


class TestCatalogQuery:

    @pytest.mark.asyncio
    async def test_default_listing_newest_first(self, catalog, catalog_products):
        page = await catalog.list_products()

        assert page.total == 3
        assert page.limit == 10
        assert [p.title for p in page.items] == ["Vanilla Bean", "Midnight Cocoa", "Strawberry Dream"]

    @pytest.mark.asyncio
    async def test_price_range(self, catalog, catalog_products):
        page = await catalog.list_products(min_price=10, max_price=20)

        assert [p.title for p in page.items] == ["Midnight Cocoa"]

    @pytest.mark.asyncio
    async def test_category_filter(self, catalog, catalog_products):
        page = await catalog.list_products(category="Vanilla Lust")

        assert [p.title for p in page.items] == ["Vanilla Bean"]

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive(self, catalog, catalog_products):
        page = await catalog.list_products(search="CHOCOLATE")

        assert [p.title for p in page.items] == ["Midnight Cocoa"]

    @pytest.mark.asyncio
    async def test_sort_by_title_ascending(self, catalog, catalog_products):
        page = await catalog.list_products(sort_field="title", sort_dir="asc")

        assert [p.title for p in page.items] == ["Midnight Cocoa", "Strawberry Dream", "Vanilla Bean"]

    @pytest.mark.asyncio
    async def test_page_past_end_is_empty(self, catalog, catalog_products):
        page = await catalog.list_products(page=3, limit=2)

        assert page.items == []
        assert page.total == 3
        assert page.pages == 2

    @pytest.mark.asyncio
    async def test_dashboard_unpaginated(self, catalog, product_repo):
        for index in range(12):
            product_repo.seed(make_product(title=f"Cake {index}"))

        products = await catalog.dashboard()

        assert len(products) == 12

    @pytest.mark.asyncio
    async def test_search_requires_query(self, catalog):
        with pytest.raises(ValidationError, match="Search query is required"):
            await catalog.search("  ")

    @pytest.mark.asyncio
    async def test_search(self, catalog, catalog_products):
        products = await catalog.search("vanilla")

        assert [p.title for p in products] == ["Vanilla Bean"]

    @pytest.mark.asyncio
    async def test_by_category_ignores_case(self, catalog, catalog_products):
        products = await catalog.by_category("dark desire")

        assert [p.title for p in products] == ["Midnight Cocoa"]

    @pytest.mark.asyncio
    async def test_by_category_empty(self, catalog, catalog_products):
        with pytest.raises(NotFound, match="No products found in category: Bundle of 3 Flavours"):
            await catalog.by_category("Bundle of 3 Flavours")

    @pytest.mark.asyncio
    async def test_by_category_required(self, catalog):
        with pytest.raises(ValidationError):
            await catalog.by_category(None)
