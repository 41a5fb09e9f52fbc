"""
User store for identity records, their emails and linked services.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from bson import ObjectId

from passport_mongo.core.errors import ImmutableFieldError, UserNotFoundError
from passport_mongo.database.protocols import DocumentCollection
from passport_mongo.models.fields import ResetPasswordFields, VerificationFields

logger = logging.getLogger(__name__)

# Set once at creation or maintained by the store, never taken from a patch
MANAGED_FIELDS = ("dateAdded", "dateRegistered", "dateUpdated")

TOUCH = {"$currentDate": {"dateUpdated": True}}


def _normalize(document: Optional[dict[str, Any]]) -> Optional[dict[str, Any]]:
    """Expose the primary key as ``id``."""
    if document is None:
        return None
    document = dict(document)
    if "_id" in document:
        document["id"] = document.pop("_id")
    return document


def _service_path(service: str) -> str:
    if not service or "." in service or service.startswith("$"):
        raise ValueError(f"Invalid service name: {service!r}")
    return f"services.{service}"


class UserStore:
    """Service for user record operations."""

    def __init__(self, collection: DocumentCollection):
        """Initialize with the users collection."""
        self.collection = collection

    # ==================== Create / Update ====================

    async def create_user(self, user: Mapping[str, Any]) -> str:
        """
        Save a new user record.

        Args:
            user: Record to store, e.g.
                ``{"emails": [{"value": "me@me.com"}],
                "services": {"facebook": {"id": "1"}}, ...}``.
                An ``id`` (or ``_id``) is generated when absent.

        Returns:
            The id of the inserted record
        """
        document = dict(user)
        given_id = document.pop("id", None)
        stored_id = document.pop("_id", None)
        user_id = given_id or stored_id or str(ObjectId())

        now = datetime.now(timezone.utc)
        document.update({
            "_id": user_id,
            "dateAdded": now,
            "dateUpdated": now,
            "dateRegistered": now,
        })

        await self.collection.insert_one(document)
        logger.info(f"Created user {user_id}")
        return user_id

    async def update_user(self, user_id: str, patch: Mapping[str, Any]) -> bool:
        """
        Overwrite top-level fields of a user record.

        Nested objects in ``patch`` replace the stored value whole; they are
        not deep-merged.

        Returns:
            True if a record with ``user_id`` exists
        """
        fields = dict(patch)
        for key in ("id", "_id"):
            if key in fields:
                if fields.pop(key) != user_id:
                    raise ImmutableFieldError(key)

        for key in MANAGED_FIELDS:
            if fields.pop(key, None) is not None:
                logger.debug(f"Ignoring managed field '{key}' in update for {user_id}")

        update: dict[str, Any] = dict(TOUCH)
        if fields:
            update["$set"] = fields

        result = await self.collection.update_one({"_id": user_id}, update)
        return result.matched_count > 0

    # ==================== Lookups ====================

    async def fetch_user_by_id(self, user_id: str) -> Optional[dict[str, Any]]:
        """Fetch a user record by id, or None."""
        return _normalize(await self.collection.find_one({"_id": user_id}))

    async def fetch_user_by_email(self, email: str) -> Optional[dict[str, Any]]:
        """Fetch the user owning ``email`` in its emails list, or None."""
        return _normalize(await self.collection.find_one({"emails.value": email}))

    async def fetch_user_by_service_id_or_email(
        self,
        service: str,
        service_id: Optional[str],
        email: Optional[str],
    ) -> Optional[dict[str, Any]]:
        """
        Fetch a user matching *either* a linked service or an email.

        Args:
            service: Name of the service, e.g. "facebook"
            service_id: Id of the service record, e.g. "152356242"
            email: Email address to match, e.g. "me@me.com"

        Returns:
            The first matching user record, or None
        """
        # A None clause would match records lacking the field entirely
        clauses = []
        if service_id is not None:
            clauses.append({f"{_service_path(service)}.id": service_id})
        if email is not None:
            clauses.append({"emails.value": email})
        if not clauses:
            return None

        return _normalize(await self.collection.find_one({"$or": clauses}))

    # ==================== Tokens ====================

    async def verify_user_account(
        self,
        user_id: str,
        fields: Optional[VerificationFields] = None,
    ) -> None:
        """Mark the account verified and drop its verification token."""
        fields = fields or VerificationFields()
        await self.collection.update_one(
            {"_id": user_id},
            {
                "$set": {fields.verified_field: True},
                "$unset": {
                    fields.token_field: "",
                    fields.token_expiration_field: "",
                },
                **TOUCH,
            },
        )

    async def add_reset_password_token(
        self,
        user_id: str,
        token: str,
        token_expiration: datetime,
        fields: Optional[ResetPasswordFields] = None,
    ) -> None:
        """
        Store a password reset token on the user.

        Any outstanding verification token is removed in the same update:
        following a reset link proves ownership of the address.
        """
        fields = fields or ResetPasswordFields()
        await self.collection.update_one(
            {"_id": user_id},
            {
                "$set": {
                    fields.token_field: token,
                    fields.token_expiration_field: token_expiration,
                },
                "$unset": {
                    fields.verification_token_field: "",
                    fields.verification_token_expiration_field: "",
                },
                **TOUCH,
            },
        )

    # ==================== Emails / Services ====================

    async def assert_user_email_data(
        self,
        user_id: str,
        email: str,
        data: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """
        Ensure the user has ``email``, optionally replacing its metadata.

        The entry written is ``{"value": email, **data}``, with any "value" key
        in ``data`` ignored. A missing address is appended. An existing
        address is replaced whole when ``data`` is given; its previous
        metadata is discarded.

        Args:
            user_id: Id of the user to update
            email: Email address to ensure exists
            data: Optional metadata, e.g. ``{"type": "work", "verified": True}``

        Raises:
            UserNotFoundError: If no user has ``user_id``
        """
        user = await self.collection.find_one({"_id": user_id})
        if user is None:
            raise UserNotFoundError(user_id)

        entry = {"value": email}
        entry.update((k, v) for k, v in (data or {}).items() if k != "value")
        emails = user.get("emails") or []
        idx = next((i for i, e in enumerate(emails) if e.get("value") == email), None)

        if idx is None:
            await self.collection.update_one(
                {"_id": user_id},
                {"$push": {"emails": entry}, **TOUCH},
            )
        elif data is not None:
            # Not atomic with the read above; concurrent asserts may race
            await self.collection.update_one(
                {"_id": user_id},
                {"$set": {f"emails.{idx}": entry}, **TOUCH},
            )

    async def assert_user_service_data(
        self,
        user_id: str,
        service: str,
        data: Mapping[str, Any],
    ) -> None:
        """
        Replace the user's record for ``service`` with ``data``.

        Other services on the user are left untouched.

        Args:
            user_id: Id of the user to update
            service: Name of the service, e.g. "facebook"
            data: Profile, e.g. ``{"id": "4321", "displayName": "John Sheppard"}``

        Raises:
            UserNotFoundError: If no user has ``user_id``
        """
        result = await self.collection.update_one(
            {"_id": user_id},
            {"$set": {_service_path(service): dict(data)}, **TOUCH},
        )
        if result.matched_count == 0:
            raise UserNotFoundError(user_id)

    @staticmethod
    def map_user_to_service_data(
        user: Optional[Mapping[str, Any]],
        service: str,
    ) -> Optional[dict[str, Any]]:
        """Project a fetched user onto one of its service records."""
        if not user:
            return None
        return (user.get("services") or {}).get(service)
