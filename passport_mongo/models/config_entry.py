"""
Configuration entry model for the config collection.
"""
from typing import Any

from pydantic import BaseModel, Field

KEY_FIELDS = ("_id", "type", "id")


class ConfigEntry(BaseModel):
    """A configuration value stored under a ``(type, id)`` key."""

    type: str = Field(..., description="Entry group, e.g. 'service'")
    id: str = Field(..., description="Key within the group, e.g. 'facebook'")
    data: dict[str, Any] = Field(default_factory=dict)

    def to_document(self) -> dict[str, Any]:
        """Flatten into the stored document shape."""
        data = {k: v for k, v in self.data.items() if k not in KEY_FIELDS}
        return {**data, "type": self.type, "id": self.id}

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "ConfigEntry":
        data = {k: v for k, v in document.items() if k not in KEY_FIELDS}
        # Entries written with the id as primary key carry no "id" field
        key = document["id"] if "id" in document else document["_id"]
        return cls(type=document["type"], id=str(key), data=data)

    def to_output(self) -> dict[str, Any]:
        """Normalized shape returned to callers."""
        return {**self.data, "type": self.type, "id": self.id}
