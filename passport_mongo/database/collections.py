"""
Collection definitions for the passport store.

Stores user identity records and provider configuration.
"""
from passport_mongo.database.protocols import DocumentCollection


class Collections:
    """Default collection names."""
    USERS = "users"
    CONFIG = "apolloPassportConfig"

    # Index definitions, keyed by logical collection
    INDEXES = {
        "users": [
            {"keys": [("emails.value", 1)]},
        ],
        "config": [
            {"keys": [("type", 1), ("id", 1)], "unique": True},
        ],
    }


async def create_indexes(
    users: DocumentCollection,
    config: DocumentCollection,
) -> None:
    """Create lookup indexes on the users and config collections."""
    targets = {"users": users, "config": config}
    for name, indexes in Collections.INDEXES.items():
        collection = targets[name]
        for index_def in indexes:
            keys = index_def["keys"]
            kwargs = {k: v for k, v in index_def.items() if k != "keys"}
            await collection.create_index(keys, **kwargs)
