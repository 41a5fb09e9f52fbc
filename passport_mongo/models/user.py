"""
User record models for the users collection.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class EmailRecord(BaseModel):
    """An email address entry, with arbitrary verification metadata."""

    model_config = ConfigDict(extra="allow")

    value: str = Field(..., description="Email address, unique within one user")


class ServiceRecord(BaseModel):
    """A linked-service profile, keyed by service name on the user."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Identifier on the provider's side")


class UserRecord(BaseModel):
    """
    User document model for the users collection.

    Caller-supplied fields beyond the ones declared here are kept as extras.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., alias="_id", description="Unique, immutable user id")
    emails: list[EmailRecord] = Field(default_factory=list)
    services: dict[str, ServiceRecord] = Field(default_factory=dict)
    verified: bool = False
    verificationToken: Optional[str] = None
    verificationTokenExpiration: Optional[datetime] = None
    resetPassToken: Optional[str] = None
    resetPassTokenExpiration: Optional[datetime] = None
    dateAdded: Optional[datetime] = None
    dateUpdated: Optional[datetime] = None
    dateRegistered: Optional[datetime] = None

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "UserRecord":
        """Typed view of a record returned by the user store."""
        return cls.model_validate(document)

    def service(self, name: str) -> Optional[ServiceRecord]:
        return self.services.get(name)

    def email(self, value: str) -> Optional[EmailRecord]:
        return next((e for e in self.emails if e.value == value), None)
