"""
Capability interface for the backing document store.

Motor's database and collection objects satisfy these protocols, as does
mongomock-motor. Any other engine adapter must provide the same calls.
"""
from typing import Any, Mapping, Optional, Protocol, Sequence


class Cursor(Protocol):
    async def to_list(self, length: Optional[int] = None) -> list[dict[str, Any]]:
        ...


class DocumentCollection(Protocol):
    async def find_one(self, filter: Mapping[str, Any]) -> Optional[dict[str, Any]]:
        ...

    def find(self, filter: Optional[Mapping[str, Any]] = None) -> Cursor:
        ...

    async def insert_one(self, document: Mapping[str, Any]) -> Any:
        ...

    async def insert_many(self, documents: Sequence[Mapping[str, Any]]) -> Any:
        ...

    async def update_one(self, filter: Mapping[str, Any], update: Mapping[str, Any]) -> Any:
        """Apply ``$set``, ``$unset``, ``$push`` and ``$currentDate`` modifiers."""
        ...

    async def create_index(self, keys: Any, **kwargs: Any) -> str:
        ...


class DocumentDatabase(Protocol):
    # Owning client; used to reach a sibling database by name
    client: Any

    def get_collection(self, name: str) -> DocumentCollection:
        ...
