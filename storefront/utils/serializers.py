"""
Conversion between document models and MongoDB documents
"""
from typing import Any, Dict
from bson import ObjectId

from ..models.base import CamelModel


def to_mongo(document: CamelModel) -> Dict[str, Any]:
    """
    Convert a document model into a MongoDB document

    Args:
        document: Model to store

    Returns:
        Dictionary keyed by camelCase aliases, with ``_id`` as an ObjectId
        when the model already carries an id
    """
    doc = document.to_dict()
    doc_id = doc.pop("_id", None)
    if doc_id is not None:
        doc["_id"] = ObjectId(doc_id)
    return doc


def convert_object_ids(value: Any) -> Any:
    """
    Recursively replace ObjectId instances with their hex strings

    Args:
        value: Document, list or scalar read from MongoDB (documents,
            sub-documents and aggregation rows alike)

    Returns:
        The same structure with every ObjectId converted to a string
    """
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: convert_object_ids(item) for key, item in value.items()}
    if isinstance(value, list):
        return [convert_object_ids(item) for item in value]
    return value
