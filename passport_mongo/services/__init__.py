"""
Services package - config and user stores.
"""
from passport_mongo.services.config_store import ConfigStore
from passport_mongo.services.user_store import UserStore

__all__ = ["ConfigStore", "UserStore"]
