from __future__ import annotations

from sqlite3 import Connection
from typing import Any, List, Mapping, Optional

from pydantic import ValidationError

from ..errors import RowDecodeError
from ..models import Project

COLUMNS = ("id", "name", "shaders", "audio_settings", "created_at", "updated_at")
_SELECT = "SELECT " + ", ".join(COLUMNS) + " FROM projects"


def ensure_schema(conn: Connection):
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS projects (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            shaders TEXT NOT NULL,
            audio_settings TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """
    )
    conn.execute("CREATE INDEX IF NOT EXISTS idx_projects_updated_at ON projects(updated_at)")


def row_to_project(row: Mapping[str, Any]) -> Project:
    try:
        return Project(**{c: row[c] for c in COLUMNS})
    except (KeyError, IndexError, ValidationError) as e:
        raise RowDecodeError(f"malformed project row: {e}") from e


def insert(conn: Connection, name: str, shaders: str, audio_settings: Optional[str], now: str) -> int:
    cur = conn.execute(
        "INSERT INTO projects(name, shaders, audio_settings, created_at, updated_at) "
        "VALUES(?, ?, ?, ?, ?)",
        (name, shaders, audio_settings, now, now),
    )
    return cur.lastrowid


def update(conn: Connection, project_id: int, name: str, shaders: str,
           audio_settings: Optional[str], now: str) -> int:
    cur = conn.execute(
        "UPDATE projects SET name=?, shaders=?, audio_settings=?, updated_at=? WHERE id=?",
        (name, shaders, audio_settings, now, project_id),
    )
    return cur.rowcount


def get_one(conn: Connection, project_id: int) -> Optional[Project]:
    row = conn.execute(_SELECT + " WHERE id=?", (project_id,)).fetchone()
    return None if row is None else row_to_project(row)


def list_all(conn: Connection) -> List[Project]:
    rows = conn.execute(_SELECT + " ORDER BY updated_at DESC, id DESC").fetchall()
    return [row_to_project(r) for r in rows]


def delete(conn: Connection, project_id: int) -> int:
    return conn.execute("DELETE FROM projects WHERE id=?", (project_id,)).rowcount
