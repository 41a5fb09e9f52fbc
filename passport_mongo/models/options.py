"""
Constructor options for the driver.
"""
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from passport_mongo.config import Settings
from passport_mongo.database.collections import Collections


class DriverOptions(BaseModel):
    """
    Options accepted by ``MongoDbDriver``.

    Keys may be given in snake_case or in the camelCase form used by the
    authentication framework (``userTableName``, ``configTableName``,
    ``dbName``, ``init``).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    user_table_name: str = Field(
        default=Collections.USERS,
        description="Collection holding user records",
    )
    config_table_name: str = Field(
        default=Collections.CONFIG,
        description="Collection holding provider configuration",
    )
    db_name: Optional[str] = Field(
        None,
        description="Database to use instead of the handle's own database",
    )
    init: bool = Field(
        default=True,
        description="Start initialization at construction time",
    )
    create_indexes: bool = Field(
        default=False,
        description="Create lookup indexes during initialization",
    )

    def merged(
        self,
        overrides: Union["DriverOptions", Mapping[str, Any], None],
    ) -> "DriverOptions":
        """Copy of these options with the explicitly given overrides applied."""
        if overrides is None:
            return self
        if not isinstance(overrides, DriverOptions):
            overrides = DriverOptions.model_validate(dict(overrides))
        return self.model_copy(update=overrides.model_dump(exclude_unset=True))

    @classmethod
    def from_settings(cls, settings: Settings) -> "DriverOptions":
        """Build options from environment settings."""
        return cls(
            user_table_name=settings.user_table_name,
            config_table_name=settings.config_table_name,
            init=settings.init,
            create_indexes=settings.create_indexes,
        )
