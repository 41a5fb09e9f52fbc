"""
passport_mongo - MongoDB persistence driver for passport-style authentication.
"""
from passport_mongo.core.errors import (
    DriverError,
    ImmutableFieldError,
    InitializationError,
    UserNotFoundError,
)
from passport_mongo.driver import MongoDbDriver
from passport_mongo.models import (
    ConfigEntry,
    DriverOptions,
    EmailRecord,
    ResetPasswordFields,
    ServiceRecord,
    UserRecord,
    VerificationFields,
)

__version__ = "0.1.0"

__all__ = [
    "MongoDbDriver",
    "DriverOptions",
    "ConfigEntry",
    "EmailRecord",
    "ServiceRecord",
    "UserRecord",
    "VerificationFields",
    "ResetPasswordFields",
    "DriverError",
    "ImmutableFieldError",
    "InitializationError",
    "UserNotFoundError",
]
