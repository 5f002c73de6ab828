from __future__ import annotations

import logging

from ..db import Store
from ..models import Project
from ..repository import project_repo

logger = logging.getLogger(__name__)


def save_project(store: Store, project: Project) -> int:
    with store.session() as conn:
        now = store.now()
        if project.id is None:
            return project_repo.insert(
                conn, project.name, project.shaders, project.audio_settings, now
            )
        touched = project_repo.update(
            conn, project.id, project.name, project.shaders, project.audio_settings, now
        )
    if touched == 0:
        logger.warning("save_project: no project with id=%s, nothing updated", project.id)
    return project.id


def get_project(store: Store, project_id: int) -> Project | None:
    with store.session() as conn:
        return project_repo.get_one(conn, project_id)


def list_projects(store: Store) -> list[Project]:
    with store.session() as conn:
        return project_repo.list_all(conn)


def delete_project(store: Store, project_id: int) -> None:
    with store.session() as conn:
        project_repo.delete(conn, project_id)
