from __future__ import annotations

from sqlite3 import Connection
from typing import Any, List, Mapping, Optional

from pydantic import ValidationError

from ..errors import RowDecodeError
from ..models import Preset

COLUMNS = ("id", "name", "shader_code", "language", "uniforms", "created_at", "updated_at")
_SELECT = "SELECT " + ", ".join(COLUMNS) + " FROM presets"


def ensure_schema(conn: Connection):
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS presets (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            shader_code TEXT NOT NULL,
            language TEXT NOT NULL,
            uniforms TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """
    )
    conn.execute("CREATE INDEX IF NOT EXISTS idx_presets_updated_at ON presets(updated_at)")


def row_to_preset(row: Mapping[str, Any]) -> Preset:
    """Decode one ``presets`` row (sqlite3.Row or dict) into a Preset."""
    try:
        return Preset(**{c: row[c] for c in COLUMNS})
    except (KeyError, IndexError, ValidationError) as e:
        raise RowDecodeError(f"malformed preset row: {e}") from e


def insert(conn: Connection, name: str, shader_code: str, language: str,
           uniforms: Optional[str], now: str) -> int:
    cur = conn.execute(
        "INSERT INTO presets(name, shader_code, language, uniforms, created_at, updated_at) "
        "VALUES(?, ?, ?, ?, ?, ?)",
        (name, shader_code, language, uniforms, now, now),
    )
    return cur.lastrowid


def update(conn: Connection, preset_id: int, name: str, shader_code: str, language: str,
           uniforms: Optional[str], now: str) -> int:
    """Overwrite every field except id/created_at. Returns the number of rows touched."""
    cur = conn.execute(
        "UPDATE presets SET name=?, shader_code=?, language=?, uniforms=?, updated_at=? "
        "WHERE id=?",
        (name, shader_code, language, uniforms, now, preset_id),
    )
    return cur.rowcount


def get_one(conn: Connection, preset_id: int) -> Optional[Preset]:
    row = conn.execute(_SELECT + " WHERE id=?", (preset_id,)).fetchone()
    return None if row is None else row_to_preset(row)


def list_all(conn: Connection) -> List[Preset]:
    rows = conn.execute(_SELECT + " ORDER BY updated_at DESC, id DESC").fetchall()
    return [row_to_preset(r) for r in rows]


def delete(conn: Connection, preset_id: int) -> int:
    return conn.execute("DELETE FROM presets WHERE id=?", (preset_id,)).rowcount
