from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector

from ..core.constants import DEFAULT_STORE_TIMEOUT_SECONDS


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    timeout_seconds: int = DEFAULT_STORE_TIMEOUT_SECONDS

    @classmethod
    def from_dict(cls, db_config: dict, *, timeout_seconds: int = DEFAULT_STORE_TIMEOUT_SECONDS) -> "DBConfig":
        return cls(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
            timeout_seconds=int(timeout_seconds),
        )


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per operation; each one gives up
    after ``timeout_seconds`` instead of hanging a reader request.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def timeout_seconds(self) -> int:
        return int(self._config.timeout_seconds)

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            connection_timeout=self.timeout_seconds,
            autocommit=False,
        )
