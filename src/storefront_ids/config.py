from typing import Any, Optional
import logging

import sqlalchemy as sa
import sqlalchemy.orm as so
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class DatabaseSettings(BaseSettings):
    """
    Connection settings for the storefront database, sourced from ``DB_*`` environment
    variables (and a ``.env`` file when present).

    ``DATABASE_URL`` wins over the individual parts when both are given.
    """

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    host: str = "localhost"
    user: str = "root"
    password: str = ""
    database: str = Field("e_com_web", validation_alias="DB_NAME")
    driver: str = "mysql+pymysql"
    port: Optional[int] = None
    database_url: Optional[str] = Field(None, validation_alias="DATABASE_URL")

    pool_size: int = 10
    max_overflow: int = 10
    pool_recycle: int = 30
    pool_pre_ping: bool = True
    connect_args: dict[str, Any] = Field(default_factory=dict)

    def url(self) -> sa.URL:
        if self.database_url:
            return sa.make_url(self.database_url)
        return sa.URL.create(
            self.driver,
            username=self.user,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=self.database,
        )

    def engine_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"pool_pre_ping": self.pool_pre_ping}
        if self.connect_args:
            kwargs["connect_args"] = dict(self.connect_args)
        # sqlite uses its own pool classes which reject sizing arguments
        if self.url().get_backend_name() != "sqlite":
            kwargs.update(
                pool_size=self.pool_size,
                max_overflow=self.max_overflow,
                pool_recycle=self.pool_recycle,
            )
        return kwargs


def create_engine(settings: Optional[DatabaseSettings] = None) -> sa.Engine:
    settings = settings or DatabaseSettings()
    url = settings.url()
    logger.info(f"Creating engine for {url.render_as_string(hide_password=True)}")
    return sa.create_engine(url, **settings.engine_kwargs())


def session_factory(engine: sa.Engine) -> so.sessionmaker[so.Session]:
    return so.sessionmaker(bind=engine, expire_on_commit=False)
