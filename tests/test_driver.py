"""
Tests for the driver facade.

These tests cover:
- Option parsing (camelCase and snake_case)
- Fire-and-forget, deferred and manual initialization
- Initialization failure surfacing to callers
- Index creation on startup
"""

import asyncio
from unittest.mock import MagicMock

import pytest

from passport_mongo import DriverOptions, InitializationError, MongoDbDriver


class TestDriverOptions:
    """Tests for constructor options."""

    def test_accepts_camel_case_options(self):
        """Options use the framework's camelCase names."""
        driver = MongoDbDriver(MagicMock(), {"init": False, "userTableName": "personnel"})

        assert driver.user_table_name == "personnel"
        assert driver.config_table_name == "apolloPassportConfig"
        assert driver.db_name is None

    def test_accepts_snake_case_options(self):
        """Options may also be given with Python field names."""
        driver = MongoDbDriver(
            MagicMock(),
            {"init": False, "config_table_name": "passport_config", "db_name": "other"},
        )

        assert driver.config_table_name == "passport_config"
        assert driver.db_name == "other"

    def test_defaults(self):
        """Default collection names match the framework's."""
        options = DriverOptions()

        assert options.user_table_name == "users"
        assert options.config_table_name == "apolloPassportConfig"
        assert options.init is True
        assert options.create_indexes is False


class TestDriverInitialization:
    """Tests for readiness of the driver."""

    @pytest.mark.asyncio
    async def test_operations_wait_for_init(self, mock_db):
        """Operations issued right after construction succeed."""
        driver = MongoDbDriver(mock_db, DriverOptions())

        user_id = await driver.create_user({"name": "John Sheppard"})
        user = await driver.fetch_user_by_id(user_id)

        assert user["name"] == "John Sheppard"
        assert driver.gate.is_ready

    @pytest.mark.asyncio
    async def test_init_false_waits_for_manual_mark(self, mock_db):
        """With init disabled, callers wait until mark_ready()."""
        driver = MongoDbDriver(mock_db, {"init": False})
        pending = asyncio.create_task(driver.fetch_config())
        await asyncio.sleep(0)

        assert not pending.done()
        assert driver.gate.pending == 1

        driver.mark_ready()

        assert await pending == {}

    @pytest.mark.asyncio
    async def test_init_false_explicit_init(self, mock_db):
        """init() runs initialization on demand."""
        driver = MongoDbDriver(mock_db, {"init": False})
        await driver.init()

        assert driver.users is not None
        assert driver.config is not None

    def test_init_deferred_without_running_loop(self):
        """A driver built outside a loop initializes on first ready()."""
        db = MagicMock()
        driver = MongoDbDriver(db, DriverOptions())

        db.get_collection.assert_not_called()

        asyncio.run(driver.ready())

        assert driver.gate.is_ready
        db.get_collection.assert_any_call("users")
        db.get_collection.assert_any_call("apolloPassportConfig")

    def test_db_name_resolves_sibling_database(self):
        """dbName selects another database on the same client."""
        db = MagicMock()
        driver = MongoDbDriver(db, {"init": False, "dbName": "other"})
        driver.mark_ready()

        db.client.get_database.assert_called_once_with("other")
        db.get_collection.assert_not_called()

    @pytest.mark.asyncio
    async def test_init_failure_rejects_waiters(self):
        """A handle that cannot resolve collections fails every waiter."""
        db = MagicMock()
        db.get_collection.side_effect = ConnectionError("unreachable")
        driver = MongoDbDriver(db, {"init": False})

        waiters = [asyncio.create_task(driver.fetch_user_by_id("x")) for _ in range(2)]
        await asyncio.sleep(0)

        with pytest.raises(InitializationError):
            await driver.init()

        results = await asyncio.gather(*waiters, return_exceptions=True)
        assert all(isinstance(r, InitializationError) for r in results)

    @pytest.mark.asyncio
    async def test_init_failure_on_construction(self):
        """Fire-and-forget init failure surfaces on the next operation."""
        db = MagicMock()
        db.get_collection.side_effect = ConnectionError("unreachable")
        driver = MongoDbDriver(db, DriverOptions())

        with pytest.raises(InitializationError):
            await driver.fetch_config()

    @pytest.mark.asyncio
    async def test_create_indexes_on_init(self, mock_db):
        """create_indexes builds the email and config type indexes."""
        driver = MongoDbDriver(mock_db, DriverOptions(create_indexes=True))
        await driver.ready()

        user_indexes = await driver.users.index_information()
        config_indexes = await driver.config.index_information()

        assert any("emails.value" in str(idx) for idx in user_indexes.values())
        assert any("type" in str(idx) for idx in config_indexes.values())

    @pytest.mark.asyncio
    async def test_queued_operations_complete_in_issue_order(self, mock_db):
        """Operations issued before readiness finish in the order issued."""
        driver = MongoDbDriver(mock_db, {"init": False})
        completed = []

        async def create(n: int):
            await driver.create_user({"id": f"user{n}"})
            completed.append(n)

        tasks = [asyncio.create_task(create(n)) for n in range(5)]
        await asyncio.sleep(0)

        assert driver.gate.pending == 5
        assert completed == []

        driver.mark_ready()
        await asyncio.gather(*tasks)

        assert completed == [0, 1, 2, 3, 4]
        assert await driver.fetch_user_by_id("user4") is not None

    @pytest.mark.asyncio
    async def test_ready_after_init_does_not_queue(self, driver):
        """Calls issued once ready resolve without queueing."""
        await driver.ready()

        assert driver.gate.pending == 0
        assert await driver.fetch_user_by_id("nobody") is None
