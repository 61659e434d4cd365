"""
Catalog query building: filters, sorting and pagination over the document store.
"""
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Generic, Iterable, List, Optional, Tuple, TypeVar

from pymongo import ASCENDING, DESCENDING

from ..exceptions import NotFound, ValidationError
from ..models.product import ProductCategory, ProductDocument, ProductSize
from ..repositories.base import DocumentRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

PRODUCT_SORT_FIELDS = ("createdAt", "updatedAt", "title", "category")
SEARCH_FIELDS = ("title", "description", "category")


@dataclass
class Page(Generic[T]):
    """One page of a listing plus the totals needed to render pagination."""
    items: List[T]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


def build_sort(
    sort_field: Optional[str],
    sort_dir: Optional[str],
    allowed: Iterable[str],
    default: str = "createdAt",
) -> List[Tuple[str, int]]:
    """Sort on a whitelisted field; anything but ``asc`` sorts descending."""
    field = sort_field if sort_field in allowed else default
    direction = ASCENDING if (sort_dir or "").lower() == "asc" else DESCENDING
    return [(field, direction)]


def search_clause(text: str) -> Dict[str, Any]:
    """Case-insensitive substring match over title, description and category."""
    pattern = re.escape(text.strip())
    return {"$or": [{field: {"$regex": pattern, "$options": "i"}} for field in SEARCH_FIELDS]}


def build_product_filter(
    category: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    search: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build a MongoDB filter for product listings

    Args:
        category: Exact category
        min_price: Lowest acceptable variant price
        max_price: Highest acceptable variant price
        search: Free text matched against title, description and category

    Returns:
        Filter document; a price range matches products having at least one
        variant priced inside it
    """
    filter_query: Dict[str, Any] = {}

    if category:
        filter_query["category"] = category

    if min_price is not None or max_price is not None:
        price_filter = {}
        if min_price is not None:
            price_filter["$gte"] = min_price
        if max_price is not None:
            price_filter["$lte"] = max_price
        filter_query["sizeVariants"] = {"$elemMatch": {"price": price_filter}}

    if search and search.strip():
        filter_query.update(search_clause(search))

    return filter_query


async def fetch_page(
    repository: DocumentRepository,
    filter_query: Dict[str, Any],
    page: int,
    limit: int,
    sort: List[Tuple[str, int]],
) -> Page:
    """Count and fetch one page; a page past the end comes back empty."""
    page = max(page, 1)
    total = await repository.count(filter_query)
    items = await repository.find(filter_query, sort=sort, skip=(page - 1) * limit, limit=limit)
    return Page(items=items, page=page, limit=limit, total=total)


def valid_options() -> Tuple[List[str], List[str]]:
    """Accepted categories and sizes."""
    return [c.value for c in ProductCategory], [s.value for s in ProductSize]


class CatalogQuery:
    """Read side of the product catalog."""

    def __init__(self, products: DocumentRepository[ProductDocument], default_limit: int = 10):
        self.products = products
        self.default_limit = default_limit

    async def list_products(
        self,
        category: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: Optional[int] = None,
        sort_field: Optional[str] = None,
        sort_dir: Optional[str] = None,
    ) -> Page:
        filter_query = build_product_filter(category, min_price, max_price, search)
        sort = build_sort(sort_field, sort_dir, PRODUCT_SORT_FIELDS)
        return await fetch_page(self.products, filter_query, page, limit or self.default_limit, sort)

    async def dashboard(
        self,
        category: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        search: Optional[str] = None,
    ) -> List[ProductDocument]:
        """Every matching product, newest first, without pagination."""
        filter_query = build_product_filter(category, min_price, max_price, search)
        return await self.products.find(filter_query, sort=[("createdAt", DESCENDING)])

    async def search(self, query: Optional[str]) -> List[ProductDocument]:
        if not query or not query.strip():
            raise ValidationError("Search query is required")
        return await self.products.find(search_clause(query), sort=[("createdAt", DESCENDING)])

    async def by_category(self, category: Optional[str]) -> List[ProductDocument]:
        """Products whose category matches exactly, ignoring case."""
        if not category or not category.strip():
            raise ValidationError("Category is required")

        filter_query = {"category": {"$regex": f"^{re.escape(category.strip())}$", "$options": "i"}}
        products = await self.products.find(filter_query, sort=[("createdAt", DESCENDING)])
        if not products:
            raise NotFound(f"No products found in category: {category}")
        return products
