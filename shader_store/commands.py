"""
Boundary commands for the frontend.

Each command returns ``{"ok": True, "data": ...}`` or
``{"ok": False, "error": "<message>"}``; the host decides how to show errors.
"""
from __future__ import annotations

import logging
from typing import Any, Callable

from pydantic import ValidationError

from .db import Store
from .errors import StoreError
from .logs import LogContext
from .models import Preset, Project, record_id_adapter
from .services import preset_svc, project_svc

logger = logging.getLogger(__name__)


def _run(log: LogContext, fn: Callable[[], Any]) -> dict:
    try:
        data = fn()
    except (StoreError, ValidationError) as e:
        log.write("ERROR", str(e))
        return {"ok": False, "error": str(e)}
    log.write("OK")
    return {"ok": True, "data": data}


def _as_preset(preset: Preset | dict) -> Preset:
    return preset if isinstance(preset, Preset) else Preset.model_validate(preset)


def _as_project(project: Project | dict) -> Project:
    return project if isinstance(project, Project) else Project.model_validate(project)


def save_preset(store: Store, preset: Preset | dict) -> dict:
    log = LogContext("SAVE_PRESET")
    log.set_payload(preset.model_dump() if isinstance(preset, Preset) else preset)

    def op():
        p = _as_preset(preset)
        log.set_entity("preset", p.id)
        new_id = preset_svc.save_preset(store, p)
        log.set_entity("preset", new_id)
        return new_id

    return _run(log, op)


def get_preset(store: Store, id: int) -> dict:
    log = LogContext("GET_PRESET")
    log.set_entity("preset", id)

    def op():
        p = preset_svc.get_preset(store, record_id_adapter.validate_python(id))
        return None if p is None else p.model_dump()

    return _run(log, op)


def list_presets(store: Store) -> dict:
    log = LogContext("LIST_PRESETS")
    return _run(log, lambda: [p.model_dump() for p in preset_svc.list_presets(store)])


def delete_preset(store: Store, id: int) -> dict:
    log = LogContext("DELETE_PRESET")
    log.set_entity("preset", id)
    return _run(log, lambda: preset_svc.delete_preset(store, record_id_adapter.validate_python(id)))


def save_project(store: Store, project: Project | dict) -> dict:
    log = LogContext("SAVE_PROJECT")
    log.set_payload(project.model_dump() if isinstance(project, Project) else project)

    def op():
        p = _as_project(project)
        log.set_entity("project", p.id)
        new_id = project_svc.save_project(store, p)
        log.set_entity("project", new_id)
        return new_id

    return _run(log, op)


def get_project(store: Store, id: int) -> dict:
    log = LogContext("GET_PROJECT")
    log.set_entity("project", id)

    def op():
        p = project_svc.get_project(store, record_id_adapter.validate_python(id))
        return None if p is None else p.model_dump()

    return _run(log, op)


def list_projects(store: Store) -> dict:
    log = LogContext("LIST_PROJECTS")
    return _run(log, lambda: [p.model_dump() for p in project_svc.list_projects(store)])


def delete_project(store: Store, id: int) -> dict:
    log = LogContext("DELETE_PROJECT")
    log.set_entity("project", id)
    return _run(log, lambda: project_svc.delete_project(store, record_id_adapter.validate_python(id)))


COMMANDS: dict[str, Callable[..., dict]] = {
    "savePreset": save_preset,
    "getPreset": get_preset,
    "listPresets": list_presets,
    "deletePreset": delete_preset,
    "saveProject": save_project,
    "getProject": get_project,
    "listProjects": list_projects,
    "deleteProject": delete_project,
}


def dispatch(store: Store, command: str, **kwargs) -> dict:
    fn = COMMANDS.get(command)
    if fn is None:
        logger.warning("Unknown command %s", command)
        return {"ok": False, "error": f"unknown_command: {command}"}
    return fn(store, **kwargs)
