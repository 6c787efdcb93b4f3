"""ObjectId helpers shared by the Mongo repositories."""

from typing import Optional

from beanie import PydanticObjectId
from bson import ObjectId


def to_object_id(value: Optional[str]) -> Optional[PydanticObjectId]:
    """Parse a string id; malformed ids map to None so lookups simply miss."""
    if value is None or not ObjectId.is_valid(value):
        return None
    return PydanticObjectId(value)


def to_str_id(value: Optional[ObjectId]) -> Optional[str]:
    return str(value) if value is not None else None
