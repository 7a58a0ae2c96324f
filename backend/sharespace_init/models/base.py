"""
Shared base for stored documents.
"""
from typing import Any, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Document(BaseModel):
    """
    Base document model.

    Attributes are snake_case in Python and camelCase in MongoDB.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
        use_enum_values=True,
        validate_default=True,
    )

    id: Optional[ObjectId] = Field(None, alias="_id", description="MongoDB ObjectId")

    def to_document(self) -> dict[str, Any]:
        """Stored form: camelCase keys, unset optional fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)
