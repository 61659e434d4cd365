"""
Document store access.

DocumentRepository is the contract the services depend on. MongoRepository
implements it over a Motor collection; tests swap in an in-memory version.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Sequence, Tuple, Type, TypeVar

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError as SchemaValidationError
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from ..exceptions import StorageError, ValidationError
from ..models.base import CamelModel, utcnow
from ..utils.serializers import convert_object_ids, to_mongo

logger = logging.getLogger(__name__)

DocumentT = TypeVar("DocumentT", bound=CamelModel)
SortSpec = Sequence[Tuple[str, int]]


def validate_document(document_class: Type[DocumentT], data: Dict[str, Any]) -> DocumentT:
    """Run schema validation, translating failures into ValidationError."""
    try:
        return document_class.model_validate(data)
    except SchemaValidationError as e:
        messages = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ValidationError("Validation error", detail=messages)


class DocumentRepository(ABC, Generic[DocumentT]):
    """Abstract access to one collection of aggregate documents."""

    document_class: Type[DocumentT]

    @abstractmethod
    async def find_by_id(self, doc_id: str) -> Optional[DocumentT]:
        """Return the document with this id, or None."""

    @abstractmethod
    async def find(
        self,
        filter_query: Dict[str, Any],
        sort: Optional[SortSpec] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[DocumentT]:
        """Return documents matching a MongoDB filter; ``limit=0`` means no limit."""

    @abstractmethod
    async def count(self, filter_query: Dict[str, Any]) -> int:
        """Count documents matching a MongoDB filter."""

    @abstractmethod
    async def save(self, document: DocumentT) -> DocumentT:
        """Validate and upsert a document, assigning an id on first save."""

    @abstractmethod
    async def update_by_id(self, doc_id: str, fields: Dict[str, Any]) -> Optional[DocumentT]:
        """
        Set top-level fields (camelCase keys) and return the updated document.

        The fields are written as given; callers validate the merged document first.
        """

    @abstractmethod
    async def delete_by_id(self, doc_id: str) -> Optional[DocumentT]:
        """Delete a document and return it, or None if it did not exist."""

    @abstractmethod
    async def aggregate(self, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Run an aggregation pipeline."""


class MongoRepository(DocumentRepository[DocumentT]):
    """Motor-backed repository for one collection."""

    collection_name: str

    def __init__(self, database: AsyncIOMotorDatabase):
        self.collection = database[self.collection_name]

    def _from_mongo(self, doc: Dict[str, Any]) -> DocumentT:
        return validate_document(self.document_class, convert_object_ids(doc))

    async def find_by_id(self, doc_id: str) -> Optional[DocumentT]:
        if not ObjectId.is_valid(doc_id):
            return None
        try:
            doc = await self.collection.find_one({"_id": ObjectId(doc_id)})
        except PyMongoError as e:
            raise StorageError(f"Failed to load {self.collection_name} document", detail=str(e))
        return self._from_mongo(doc) if doc else None

    async def find(self, filter_query, sort=None, skip=0, limit=0):
        try:
            cursor = self.collection.find(filter_query)
            if sort:
                cursor = cursor.sort(list(sort))
            if skip:
                cursor = cursor.skip(skip)
            if limit:
                cursor = cursor.limit(limit)
            docs = await cursor.to_list(length=limit or None)
        except PyMongoError as e:
            raise StorageError(f"Failed to query {self.collection_name}", detail=str(e))
        return [self._from_mongo(doc) for doc in docs]

    async def count(self, filter_query):
        try:
            return await self.collection.count_documents(filter_query)
        except PyMongoError as e:
            raise StorageError(f"Failed to count {self.collection_name}", detail=str(e))

    async def save(self, document):
        now = utcnow()
        document.updated_at = now
        if document.created_at is None:
            document.created_at = now

        # Re-validate the whole aggregate; in-place list edits bypass field validators
        validated = validate_document(self.document_class, document.to_dict())
        doc = to_mongo(validated)
        try:
            if "_id" in doc:
                await self.collection.replace_one({"_id": doc["_id"]}, doc, upsert=True)
            else:
                result = await self.collection.insert_one(doc)
                document.id = str(result.inserted_id)
        except PyMongoError as e:
            raise StorageError(f"Failed to save {self.collection_name} document", detail=str(e))
        logger.debug(f"Saved {self.collection_name} document {document.id}")
        return document

    async def update_by_id(self, doc_id, fields):
        if not ObjectId.is_valid(doc_id):
            return None
        update_doc = dict(fields)
        update_doc["updatedAt"] = utcnow()
        try:
            doc = await self.collection.find_one_and_update(
                {"_id": ObjectId(doc_id)},
                {"$set": update_doc},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise StorageError(f"Failed to update {self.collection_name} document", detail=str(e))
        return self._from_mongo(doc) if doc else None

    async def delete_by_id(self, doc_id):
        if not ObjectId.is_valid(doc_id):
            return None
        try:
            doc = await self.collection.find_one_and_delete({"_id": ObjectId(doc_id)})
        except PyMongoError as e:
            raise StorageError(f"Failed to delete {self.collection_name} document", detail=str(e))
        return self._from_mongo(doc) if doc else None

    async def aggregate(self, pipeline):
        try:
            cursor = self.collection.aggregate(pipeline)
            results = await cursor.to_list(length=None)
        except PyMongoError as e:
            raise StorageError(f"Failed to aggregate {self.collection_name}", detail=str(e))
        return [convert_object_ids(result) for result in results]
