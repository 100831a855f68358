from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connect_timeout: int = 10

    @classmethod
    def from_dict(cls, raw: dict) -> "DBConfig":
        """Build from a settings DB_CONFIG dict (see config/)."""
        return cls(
            host=str(raw["host"]),
            port=int(raw.get("port", 3306)),
            user=str(raw["user"]),
            password=str(raw.get("password", "")),
            database=str(raw["database"]),
            connect_timeout=int(raw.get("connect_timeout", 10)),
        )


class DatabaseConnection:
    """Process-wide factory for short-lived MySQL connections.

    Every `connect()` returns a fresh connection, so each request thread runs
    its own transaction. Asking for an instance with a different config
    replaces the shared one.
    """

    _instance: Optional["DatabaseConnection"] = None
    _instance_lock = threading.Lock()

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        with cls._instance_lock:
            if cls._instance is None or cls._instance.config != config:
                cls._instance = cls(config)
            return cls._instance

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=self._config.port,
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            connection_timeout=self._config.connect_timeout,
            autocommit=False,
        )
