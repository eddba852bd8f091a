from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector
from pymongo import MongoClient


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str


class DatabaseConnection:
    """Singleton-like MySQL connection factory.

    Note: We create short-lived connections per operation (safe for simple Flask apps).
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

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
        )


@dataclass
class MongoConfig:
    uri: str
    database: str


class MongoConnection:
    """Process-wide MongoDB handle.

    One ``MongoClient`` is shared by every request; the driver pools sockets
    itself. The client is created lazily so building the container does not
    touch the network.
    """

    _instance: Optional["MongoConnection"] = None

    def __init__(self, config: MongoConfig):
        self._config = config
        self._client: Optional[MongoClient] = None

    @classmethod
    def get_instance(cls, config: MongoConfig) -> "MongoConnection":
        if cls._instance is None:
            cls._instance = MongoConnection(config)
        return cls._instance

    def client(self) -> MongoClient:
        if self._client is None:
            self._client = MongoClient(self._config.uri, tz_aware=False)
        return self._client

    def collection(self, name: str):
        return self.client()[self._config.database][name]

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
