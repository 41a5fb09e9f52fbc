"""
Database module - MongoDB connection helpers, collection definitions and
the capability interface the stores rely on.
"""
from passport_mongo.database.connections import (
    get_mongo_client,
    close_connections,
    get_database,
)
from passport_mongo.database import collections

__all__ = [
    "get_mongo_client",
    "close_connections",
    "get_database",
    "collections",
]
