from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

from mysql.connector import pooling

from ..core.constants import DEFAULT_POOL_SIZE


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = DEFAULT_POOL_SIZE
    pool_name: str = "shift_checkin"


class DatabaseConnection:
    """Bounded pool of MySQL connections, owned by the application container.

    The pool is opened on first use. ``connect()`` borrows a connection and
    waits while all of them are in use; callers hand it back by closing the
    connection and then calling ``release()``.
    """

    def __init__(self, config: DBConfig, *, pool: Optional[pooling.MySQLConnectionPool] = None):
        self._config = config
        self._pool = pool
        self._lock = threading.Lock()
        self._slots = threading.BoundedSemaphore(int(config.pool_size))

    def describe(self) -> str:
        return f"{self._config.user}@{self._config.host}:{self._config.port}/{self._config.database}"

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        if self._pool is None:
            with self._lock:
                if self._pool is None:
                    self._pool = pooling.MySQLConnectionPool(
                        pool_name=self._config.pool_name,
                        pool_size=int(self._config.pool_size),
                        host=self._config.host,
                        port=int(self._config.port),
                        user=self._config.user,
                        password=self._config.password,
                        database=self._config.database,
                    )
        return self._pool

    def connect(self):
        # mysql-connector raises PoolError on an exhausted pool; queue instead.
        self._slots.acquire()
        try:
            return self._get_pool().get_connection()
        except BaseException:
            self._slots.release()
            raise

    def release(self) -> None:
        self._slots.release()
