"""Tests for settings, database bootstrap and document conversion."""

from pathlib import Path

import pytest
from bson import ObjectId

from storefront.config.database import DatabaseManager, get_database
from storefront.config.settings import Settings
from storefront.exceptions import StorageError
from storefront.utils.serializers import convert_object_ids, to_mongo

from .factories import make_product


def test_upload_paths():
    settings = Settings(upload_dir=Path("/srv/uploads"), product_image_folder="Products")

    assert settings.product_upload_path == Path("/srv/uploads/Products")
    assert settings.product_image_url_prefix == "/uploads/Products"


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_NAME", "shop_test")
    monkeypatch.setenv("JWT_EXPIRES_IN", "30m")
    monkeypatch.setenv("MONGODB_MAX_POOL_SIZE", "25")

    settings = Settings()

    assert settings.database_name == "shop_test"
    assert settings.jwt_expires_in == "30m"
    assert settings.max_pool_size == 25


def test_to_mongo_converts_id():
    product = make_product()
    assert "_id" not in to_mongo(product)

    product.id = str(ObjectId())
    doc = to_mongo(product)
    assert isinstance(doc["_id"], ObjectId)
    assert doc["sizeVariants"][0]["size"] == "Small"
    assert isinstance(doc["sizeVariants"][0]["_id"], str)


def test_convert_object_ids_nested():
    oid = ObjectId()

    converted = convert_object_ids({"_id": oid, "items": [{"_id": oid, "n": 1}], "meta": {"ref": oid}})

    assert converted == {"_id": str(oid), "items": [{"_id": str(oid), "n": 1}], "meta": {"ref": str(oid)}}


@pytest.mark.asyncio
async def test_unconnected_manager():
    manager = DatabaseManager(Settings())

    assert not manager.is_connected()
    assert await manager.ping() == "disconnected"
    await manager.create_indexes()
    await manager.disconnect()


@pytest.mark.asyncio
async def test_get_database_without_connection():
    with pytest.raises(StorageError) as exc_info:
        await get_database()

    assert exc_info.value.status_code == 503
