from __future__ import annotations

import logging

from ..db import Store
from ..models import Preset
from ..repository import preset_repo

logger = logging.getLogger(__name__)


def save_preset(store: Store, preset: Preset) -> int:
    """
    Insert when ``preset.id`` is None, otherwise overwrite that row.

    Updating an id with no row is a no-op that still returns the id.
    """
    with store.session() as conn:
        now = store.now()
        if preset.id is None:
            return preset_repo.insert(
                conn, preset.name, preset.shader_code, preset.language, preset.uniforms, now
            )
        touched = preset_repo.update(
            conn, preset.id, preset.name, preset.shader_code, preset.language, preset.uniforms, now
        )
    if touched == 0:
        logger.warning("save_preset: no preset with id=%s, nothing updated", preset.id)
    return preset.id


def get_preset(store: Store, preset_id: int) -> Preset | None:
    with store.session() as conn:
        return preset_repo.get_one(conn, preset_id)


def list_presets(store: Store) -> list[Preset]:
    """All presets, most recently updated first."""
    with store.session() as conn:
        return preset_repo.list_all(conn)


def delete_preset(store: Store, preset_id: int) -> None:
    with store.session() as conn:
        preset_repo.delete(conn, preset_id)
