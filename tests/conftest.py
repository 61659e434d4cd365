"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from storefront.config.settings import Settings, get_settings
from storefront.models.order import OrderDocument
from storefront.models.product import ProductDocument
from storefront.services.blob_store import LocalBlobStore
from storefront.services.catalog_query import CatalogQuery
from storefront.services.image_gallery import ImageGallery
from storefront.services.order_service import OrderService
from storefront.services.product_service import ProductService
from storefront.services.variant_ledger import VariantLedger

from .factories import ADMIN_EMAIL, ADMIN_PASSWORD, JWT_SECRET, make_item, make_product
from .fakes import InMemoryRepository

@pytest.fixture
def blob_store(tmp_path):
    return LocalBlobStore(tmp_path / "Products", url_prefix="/uploads/Products")


@pytest.fixture
def product_repo():
    return InMemoryRepository(ProductDocument)


@pytest.fixture
def order_repo():
    return InMemoryRepository(OrderDocument)


@pytest.fixture
def ledger(product_repo):
    return VariantLedger(product_repo)


@pytest.fixture
def gallery(product_repo, blob_store):
    return ImageGallery(product_repo, blob_store)


@pytest.fixture
def product_service(product_repo, gallery):
    return ProductService(product_repo, gallery)


@pytest.fixture
def catalog(product_repo):
    return CatalogQuery(product_repo, default_limit=10)


@pytest.fixture
def order_service(order_repo):
    return OrderService(order_repo, default_limit=20)


@pytest.fixture
def saved_product(product_repo):
    """A stored product with one Small variant and no images."""
    return product_repo.seed(make_product())


@pytest.fixture
def saved_order(order_repo):
    """A stored order with two items totalling 40."""
    order = OrderDocument(items=[make_item(price=10.0, quantity=1), make_item(title="Dark Cake", price=15.0, quantity=2)])
    order.total_cart_price = 40.0
    return order_repo.seed(order)


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        upload_dir=tmp_path,
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
        jwt_secret=JWT_SECRET,
    )


@pytest.fixture
def client(product_repo, order_repo, blob_store, test_settings):
    """TestClient with the document store and blob store replaced by fakes."""
    from storefront.main import app
    from storefront.utils.dependencies import (
        get_blob_store,
        get_order_repository,
        get_product_repository,
    )

    app.dependency_overrides[get_product_repository] = lambda: product_repo
    app.dependency_overrides[get_order_repository] = lambda: order_repo
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    app.dependency_overrides[get_settings] = lambda: test_settings

    yield TestClient(app)

    app.dependency_overrides.clear()
