from __future__ import annotations

# shader_store/db.py
import logging
import os
import sqlite3
import sys
import threading
import datetime as dt
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator

import yaml

from .errors import StatementError, StoreClosedError, StoreInitError
from .repository import preset_repo, project_repo

logger = logging.getLogger(__name__)

# DB path resolution order:
# 1) explicit argument (Store(db_path) / CLI --db)
# 2) env SHADER_STORE_DB_PATH
# 3) db_path in config.yaml (env SHADER_STORE_CONFIG, else ./config.yaml)
# 4) <app data dir>/shader-live-coding/shader_live_coding.db
ENV_DB_PATH = "SHADER_STORE_DB_PATH"
ENV_CONFIG_PATH = "SHADER_STORE_CONFIG"
APP_ID = "shader-live-coding"
DB_FILENAME = "shader_live_coding.db"
MEMORY = ":memory:"


def _config_path() -> str:
    return os.environ.get(ENV_CONFIG_PATH) or os.path.join(os.getcwd(), "config.yaml")


def read_config_yaml(path: str | None = None) -> dict:
    cfg_path = path or _config_path()
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable config %s: %s", cfg_path, e)
        return {}
    if not isinstance(cfg, dict):
        logger.warning("Ignoring config %s: top level is not a mapping", cfg_path)
        return {}
    out = {}
    for k in ("db_path", "log_level"):
        v = cfg.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    return out


def app_data_dir() -> Path:
    if sys.platform.startswith("win"):
        base = os.environ.get("APPDATA") or os.path.join(Path.home(), "AppData", "Roaming")
    elif sys.platform == "darwin":
        base = os.path.join(Path.home(), "Library", "Application Support")
    else:
        base = os.environ.get("XDG_DATA_HOME") or os.path.join(Path.home(), ".local", "share")
    return Path(base) / APP_ID


def get_db_path(db_path: str | None = None, config_path: str | None = None) -> str:
    if db_path:
        return str(db_path)
    env_path = os.environ.get(ENV_DB_PATH)
    if env_path:
        return env_path
    cfg_db = read_config_yaml(config_path).get("db_path")
    if cfg_db:
        return cfg_db
    return str(app_data_dir() / DB_FILENAME)


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class Store:
    """
    Owns the single SQLite connection for presets and projects.

    Every statement runs inside ``session()``, which holds an exclusive lock
    for its whole duration, so at most one statement touches the connection
    at a time no matter how many threads call in.
    """

    def __init__(self, db_path: str | None = None, *, config_path: str | None = None,
                 clock: Callable[[], dt.datetime] | None = None):
        self.path = get_db_path(db_path, config_path)
        self._clock = clock or _utcnow
        self._lock = threading.Lock()
        self._conn = self._open(self.path)
        self._last_ts = self._stored_high_water(self._conn, self.path)
        logger.info("Database ready at %s", self.path)

    @staticmethod
    def _stored_high_water(conn: sqlite3.Connection, path: str) -> dt.datetime | None:
        """Latest ``updated_at`` already on disk, so ``now()`` never goes below it."""
        try:
            row = conn.execute(
                "SELECT MAX(ts) FROM ("
                "SELECT MAX(updated_at) AS ts FROM presets "
                "UNION ALL SELECT MAX(updated_at) FROM projects)"
            ).fetchone()
        except sqlite3.Error as e:
            conn.close()
            raise StoreInitError(f"cannot read timestamps in {path}: {e}") from e
        if row is None or row[0] is None:
            return None
        try:
            ts = dt.datetime.fromisoformat(row[0])
        except (TypeError, ValueError):
            logger.warning("Ignoring unparsable updated_at %r in %s", row[0], path)
            return None
        # CURRENT_TIMESTAMP defaults are naive UTC
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=dt.timezone.utc)
        return ts.astimezone(dt.timezone.utc)

    @staticmethod
    def _open(path: str) -> sqlite3.Connection:
        if path != MEMORY:
            dirn = os.path.dirname(os.path.abspath(path))
            try:
                os.makedirs(dirn, exist_ok=True)
            except OSError as e:
                raise StoreInitError(f"cannot create storage directory {dirn}: {e}") from e
        try:
            conn = sqlite3.connect(path, check_same_thread=False, isolation_level=None)
        except sqlite3.Error as e:
            raise StoreInitError(f"cannot open database {path}: {e}") from e
        try:
            conn.row_factory = sqlite3.Row
            preset_repo.ensure_schema(conn)
            project_repo.ensure_schema(conn)
        except sqlite3.Error as e:
            conn.close()
            raise StoreInitError(f"cannot create schema in {path}: {e}") from e
        return conn

    @contextmanager
    def session(self) -> Iterator[sqlite3.Connection]:
        """Hold the store lock and yield the connection."""
        with self._lock:
            if self._conn is None:
                raise StoreClosedError("store is closed")
            try:
                yield self._conn
            except sqlite3.Error as e:
                raise StatementError(str(e)) from e
            except OverflowError as e:
                # raised by parameter binding for ints outside SQLite INTEGER
                raise StatementError(str(e)) from e

    def now(self) -> str:
        """
        Timestamp for the operation in progress; call it once per operation
        while holding ``session()``. Strictly increasing across calls.
        """
        ts = self._clock()
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=dt.timezone.utc)
        ts = ts.astimezone(dt.timezone.utc)
        if self._last_ts is not None and ts <= self._last_ts:
            ts = self._last_ts + dt.timedelta(microseconds=1)
        self._last_ts = ts
        return ts.isoformat(timespec="microseconds")

    @property
    def closed(self) -> bool:
        return self._conn is None

    def close(self):
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                logger.info("Database closed: %s", self.path)

    def __enter__(self) -> "Store":
        return self

    def __exit__(self, *exc):
        self.close()
