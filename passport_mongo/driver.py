"""
MongoDB driver for the passport authentication framework.

The framework holds a ``MongoDbDriver`` and calls its data operations. Every
operation first waits for the driver to resolve its collections, so a driver
can be used immediately after construction.
"""
import asyncio
import logging
from datetime import datetime
from typing import Any, Mapping, Optional, Union

from passport_mongo.config import Settings, get_settings
from passport_mongo.core.readiness import GateState, ReadinessGate
from passport_mongo.database.collections import create_indexes
from passport_mongo.database.connections import get_database
from passport_mongo.database.protocols import DocumentCollection, DocumentDatabase
from passport_mongo.models.fields import ResetPasswordFields, VerificationFields
from passport_mongo.models.options import DriverOptions
from passport_mongo.services.config_store import ConfigStore
from passport_mongo.services.user_store import UserStore

logger = logging.getLogger(__name__)


class MongoDbDriver:
    """
    Persistence driver backed by a MongoDB database.

    Args:
        db: Motor database handle, e.g. ``AsyncIOMotorClient(uri)["app"]``
        options: ``DriverOptions``, or a mapping with any of
            ``userTableName`` (default "users"),
            ``configTableName`` (default "apolloPassportConfig"),
            ``dbName`` (default: the handle's database) and
            ``init`` (default True). Omitted options come from the
            environment settings.
    """

    def __init__(
        self,
        db: DocumentDatabase,
        options: Union[DriverOptions, Mapping[str, Any], None] = None,
    ):
        self.db = db
        options = DriverOptions.from_settings(get_settings()).merged(options)
        self.options = options

        self.user_table_name = options.user_table_name
        self.config_table_name = options.config_table_name
        self.db_name = options.db_name

        self.users: Optional[DocumentCollection] = None
        self.config: Optional[DocumentCollection] = None
        self._user_store: Optional[UserStore] = None
        self._config_store: Optional[ConfigStore] = None

        self._gate = ReadinessGate()
        self._init_task: Optional[asyncio.Task] = None
        self._init_deferred = False

        if options.init:
            self._start_init()

    @classmethod
    async def from_settings(cls, settings: Optional[Settings] = None) -> "MongoDbDriver":
        """Create a driver on the shared motor client using environment settings."""
        settings = settings or get_settings()
        db = await get_database(settings.db_name)
        return cls(db, DriverOptions.from_settings(settings))

    # ==================== Initialization ====================

    @property
    def gate(self) -> ReadinessGate:
        return self._gate

    def _start_init(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Constructed outside an event loop; start on first ready()
            self._init_deferred = True
            return
        self._init_task = loop.create_task(self._init())

    def _resolve_collections(self) -> None:
        database = self.db
        if self.db_name:
            database = self.db.client.get_database(self.db_name)

        self.users = database.get_collection(self.user_table_name)
        self.config = database.get_collection(self.config_table_name)
        self._user_store = UserStore(self.users)
        self._config_store = ConfigStore(self.config)

    async def _init(self) -> None:
        if self._gate.state is not GateState.INITIALIZING:
            return

        logger.debug(
            f"Initializing driver (users='{self.user_table_name}', "
            f"config='{self.config_table_name}')"
        )
        try:
            self._resolve_collections()
            if self.options.create_indexes:
                await create_indexes(self.users, self.config)
        except Exception as e:
            logger.error(f"Driver initialization failed: {e}")
            self._gate.mark_failed(e)
            return

        self._gate.mark_ready()
        logger.info("Driver ready")

    async def init(self) -> None:
        """
        Run initialization, or join one already in progress.

        Raises:
            InitializationError: If the collections could not be resolved
        """
        if self._init_task is None:
            self._init_deferred = False
            self._init_task = asyncio.get_running_loop().create_task(self._init())
        await self._init_task
        await self._gate.wait()

    async def ready(self) -> None:
        """Wait until the driver is ready (returns at once if it already is)."""
        if self._init_deferred:
            self._init_deferred = False
            self._init_task = asyncio.get_running_loop().create_task(self._init())
        await self._gate.wait()

    def mark_ready(self) -> None:
        """Mark the driver ready by hand, for drivers built with ``init=False``."""
        if self.users is None:
            self._resolve_collections()
        self._gate.mark_ready()

    # ==================== Config ====================

    async def fetch_config(self) -> dict[str, dict[str, dict[str, Any]]]:
        """Retrieve all configuration, nested as ``{type: {id: entry}}``."""
        await self.ready()
        return await self._config_store.fetch_config()

    async def set_config_key(self, type: str, id: str, value: Mapping[str, Any]) -> None:
        """Insert the configuration entry ``(type, id)``."""
        await self.ready()
        await self._config_store.set_config_key(type, id, value)

    # ==================== Users ====================

    async def create_user(self, user: Mapping[str, Any]) -> str:
        await self.ready()
        return await self._user_store.create_user(user)

    async def update_user(self, user_id: str, patch: Mapping[str, Any]) -> bool:
        await self.ready()
        return await self._user_store.update_user(user_id, patch)

    async def fetch_user_by_id(self, user_id: str) -> Optional[dict[str, Any]]:
        await self.ready()
        return await self._user_store.fetch_user_by_id(user_id)

    async def fetch_user_by_email(self, email: str) -> Optional[dict[str, Any]]:
        await self.ready()
        return await self._user_store.fetch_user_by_email(email)

    async def fetch_user_by_service_id_or_email(
        self,
        service: str,
        service_id: Optional[str],
        email: Optional[str],
    ) -> Optional[dict[str, Any]]:
        await self.ready()
        return await self._user_store.fetch_user_by_service_id_or_email(
            service, service_id, email
        )

    async def verify_user_account(
        self,
        user_id: str,
        fields: Optional[VerificationFields] = None,
    ) -> None:
        await self.ready()
        await self._user_store.verify_user_account(user_id, fields)

    async def add_reset_password_token(
        self,
        user_id: str,
        token: str,
        token_expiration: datetime,
        fields: Optional[ResetPasswordFields] = None,
    ) -> None:
        await self.ready()
        await self._user_store.add_reset_password_token(
            user_id, token, token_expiration, fields
        )

    async def assert_user_email_data(
        self,
        user_id: str,
        email: str,
        data: Optional[Mapping[str, Any]] = None,
    ) -> None:
        await self.ready()
        await self._user_store.assert_user_email_data(user_id, email, data)

    async def assert_user_service_data(
        self,
        user_id: str,
        service: str,
        data: Mapping[str, Any],
    ) -> None:
        await self.ready()
        await self._user_store.assert_user_service_data(user_id, service, data)

    def map_user_to_service_data(
        self,
        user: Optional[Mapping[str, Any]],
        service: str,
    ) -> Optional[dict[str, Any]]:
        """Return the user's record for ``service``, or None."""
        return UserStore.map_user_to_service_data(user, service)
