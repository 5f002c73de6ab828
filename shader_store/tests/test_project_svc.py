import json

from shader_store.models import Preset, Project
from shader_store.services.preset_svc import save_preset
from shader_store.services.project_svc import delete_project, get_project, list_projects, save_project

SHADERS = json.dumps([{"id": "main", "language": "glsl", "fragmentShader": "void main(){}"}])


def test_project_lifecycle(store):
    pid = save_project(store, Project(name="live set", shaders=SHADERS))
    first = get_project(store, pid)
    assert first.name == "live set"
    assert json.loads(first.shaders)[0]["id"] == "main"
    assert first.audio_settings is None
    assert first.created_at == first.updated_at

    audio = json.dumps({"fftSize": 2048, "smoothing": 0.8})
    assert save_project(store, first.model_copy(update={"audio_settings": audio})) == pid
    got = get_project(store, pid)
    assert got.audio_settings == audio
    assert got.created_at == first.created_at
    assert got.updated_at > first.updated_at

    delete_project(store, pid)
    assert get_project(store, pid) is None
    delete_project(store, pid)


def test_update_of_missing_project_returns_id(store):
    assert save_project(store, Project(id=7, name="ghost", shaders="[]")) == 7
    assert get_project(store, 7) is None


def test_projects_recency_order(store):
    a = save_project(store, Project(name="a", shaders="[]"))
    b = save_project(store, Project(name="b", shaders="[]"))
    assert [p.id for p in list_projects(store)] == [b, a]
    save_project(store, get_project(store, a).model_copy(update={"name": "a2"}))
    assert [p.name for p in list_projects(store)] == ["a2", "b"]


def test_empty_project_name_is_stored_and_listed(store):
    pid = save_project(store, Project(name="", shaders="[]"))
    assert get_project(store, pid).name == ""
    assert [p.name for p in list_projects(store)] == [""]


def test_id_spaces_are_independent(store):
    preset_id = save_preset(store, Preset(name="p", shader_code="x", language="glsl"))
    project_id = save_project(store, Project(name="q", shaders="[]"))
    assert preset_id == project_id == 1
    assert get_project(store, 1).name == "q"
