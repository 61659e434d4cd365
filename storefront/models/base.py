"""
Shared base for document and API models.

Documents are stored with camelCase keys and ``_id`` identifiers, so every
model serialises by alias while still accepting snake_case field names.
"""
from datetime import datetime, timezone
from bson import ObjectId
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def new_object_id() -> str:
    """Generate a fresh ObjectId hex string."""
    return str(ObjectId())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Base model serialised with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_dict(self) -> dict:
        """Dump with aliases in a JSON/BSON friendly shape."""
        return self.model_dump(by_alias=True, mode="python")
