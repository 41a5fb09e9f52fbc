"""
Models package.
"""
from passport_mongo.models.config_entry import ConfigEntry
from passport_mongo.models.fields import ResetPasswordFields, VerificationFields
from passport_mongo.models.options import DriverOptions
from passport_mongo.models.user import EmailRecord, ServiceRecord, UserRecord

__all__ = [
    "ConfigEntry",
    "DriverOptions",
    "EmailRecord",
    "ResetPasswordFields",
    "ServiceRecord",
    "UserRecord",
    "VerificationFields",
]
