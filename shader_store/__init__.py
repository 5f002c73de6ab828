"""
Shader Store

Local SQLite persistence for shader presets and projects of the live-coding
app: one connection, one lock, upsert/get/list/delete per record kind.
"""
from .db import Store, get_db_path
from .errors import RowDecodeError, StatementError, StoreClosedError, StoreError, StoreInitError
from .models import Preset, Project

__all__ = [
    "Store",
    "get_db_path",
    "Preset",
    "Project",
    "StoreError",
    "StoreInitError",
    "StoreClosedError",
    "StatementError",
    "RowDecodeError",
]
