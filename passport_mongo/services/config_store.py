"""
Config store for provider configuration entries.
"""
import logging
from typing import Any, Mapping

from passport_mongo.database.protocols import DocumentCollection
from passport_mongo.models.config_entry import ConfigEntry

logger = logging.getLogger(__name__)


class ConfigStore:
    """Service for ``(type, id)``-keyed configuration entries."""

    def __init__(self, collection: DocumentCollection):
        """Initialize with the config collection."""
        self.collection = collection

    async def set_config_key(self, type: str, id: str, value: Mapping[str, Any]) -> None:
        """
        Insert a configuration entry.

        This is a pure insert. Writing an existing ``(type, id)`` again
        stores a second entry, or raises the backing store's duplicate key
        error when the unique config index exists.

        Args:
            type: Entry group, e.g. "service"
            id: Key within the group, e.g. "facebook"
            value: Payload stored flattened alongside the key
        """
        entry = ConfigEntry(type=type, id=id, data=dict(value))
        await self.collection.insert_one(entry.to_document())
        logger.debug(f"Inserted config entry {type}/{id}")

    async def fetch_config(self) -> dict[str, dict[str, dict[str, Any]]]:
        """
        Retrieve all configuration.

        Returns:
            Nested dict arranged as ``{type: {id: {"type", "id", **data}}}``
        """
        documents = await self.collection.find({}).to_list(length=None)

        out: dict[str, dict[str, dict[str, Any]]] = {}
        for document in documents:
            if "type" not in document:
                logger.warning(f"Skipping config document without a type: {document.get('_id')}")
                continue
            entry = ConfigEntry.from_document(document)
            out.setdefault(entry.type, {})[entry.id] = entry.to_output()

        return out
