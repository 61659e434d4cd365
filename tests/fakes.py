"""In-memory stand-ins for the document store used by service and API tests."""

import copy
import operator
import re
from datetime import timedelta
from typing import Any, Dict, List, Optional, Type

from storefront.models.base import new_object_id, utcnow
from storefront.repositories.base import DocumentRepository, DocumentT, validate_document

_COMPARISONS = {
    "$gt": operator.gt,
    "$gte": operator.ge,
    "$lt": operator.lt,
    "$lte": operator.le,
    "$ne": operator.ne,
}


def matches(doc: Dict[str, Any], filter_query: Dict[str, Any]) -> bool:
    """Evaluate the subset of MongoDB filter syntax the services emit."""
    for key, condition in filter_query.items():
        if key == "$or":
            if not any(matches(doc, clause) for clause in condition):
                return False
        elif not _match_value(doc.get(key), condition):
            return False
    return True


def _match_value(value: Any, condition: Any) -> bool:
    if not isinstance(condition, dict):
        return value == condition
    if "$elemMatch" in condition:
        return isinstance(value, list) and any(matches(el, condition["$elemMatch"]) for el in value)
    if "$regex" in condition:
        flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
        return isinstance(value, str) and re.search(condition["$regex"], value, flags) is not None
    return value is not None and all(_COMPARISONS[op](value, operand) for op, operand in condition.items())


class InMemoryRepository(DocumentRepository[DocumentT]):
    """Dict-backed repository that validates documents like the Mongo one."""

    def __init__(self, document_class: Type[DocumentT]):
        self.document_class = document_class
        self.docs: Dict[str, Dict[str, Any]] = {}
        self.last_filter: Optional[Dict[str, Any]] = None
        self.pipelines: List[List[Dict[str, Any]]] = []
        self.aggregate_results: List[List[Dict[str, Any]]] = []
        self.fail_on_save: Optional[Exception] = None
        self._clock = utcnow()

    def _tick(self):
        # Strictly increasing timestamps keep createdAt ordering deterministic
        self._clock += timedelta(milliseconds=1)
        return self._clock

    def _load(self, raw: Dict[str, Any]) -> DocumentT:
        return validate_document(self.document_class, copy.deepcopy(raw))

    def seed(self, document: DocumentT) -> DocumentT:
        """Store a document synchronously, for test setup."""
        now = self._tick()
        document.created_at = document.created_at or now
        document.updated_at = now
        if document.id is None:
            document.id = new_object_id()
        self.docs[document.id] = copy.deepcopy(document.to_dict())
        return document

    def get(self, doc_id: str) -> Optional[DocumentT]:
        raw = self.docs.get(doc_id)
        return self._load(raw) if raw else None

    async def find_by_id(self, doc_id):
        return self.get(doc_id)

    async def find(self, filter_query, sort=None, skip=0, limit=0):
        self.last_filter = filter_query
        rows = [raw for raw in self.docs.values() if matches(raw, filter_query)]
        for field, direction in reversed(list(sort or [])):
            rows.sort(key=lambda raw: raw.get(field), reverse=direction < 0)
        rows = rows[skip:]
        if limit:
            rows = rows[:limit]
        return [self._load(raw) for raw in rows]

    async def count(self, filter_query):
        return sum(1 for raw in self.docs.values() if matches(raw, filter_query))

    async def save(self, document):
        if self.fail_on_save is not None:
            raise self.fail_on_save
        now = self._tick()
        document.updated_at = now
        if document.created_at is None:
            document.created_at = now
        validated = validate_document(self.document_class, document.to_dict())
        if document.id is None:
            document.id = new_object_id()
            validated.id = document.id
        self.docs[document.id] = copy.deepcopy(validated.to_dict())
        return document

    async def update_by_id(self, doc_id, fields):
        raw = self.docs.get(doc_id)
        if raw is None:
            return None
        # Applied unvalidated, like $set; the result is validated on load
        self.docs[doc_id] = {**raw, **copy.deepcopy(fields), "updatedAt": self._tick()}
        return self._load(self.docs[doc_id])

    async def delete_by_id(self, doc_id):
        raw = self.docs.pop(doc_id, None)
        return self._load(raw) if raw else None

    async def aggregate(self, pipeline):
        self.pipelines.append(pipeline)
        return self.aggregate_results.pop(0) if self.aggregate_results else []
