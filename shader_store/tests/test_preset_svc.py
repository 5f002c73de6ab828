import logging

from shader_store.models import Preset
from shader_store.services.preset_svc import delete_preset, get_preset, list_presets, save_preset


def _preset(**kw):
    base = dict(name="glow", shader_code="void main() { gl_FragColor = vec4(1.0); }", language="glsl")
    base.update(kw)
    return Preset(**base)


def test_glow_lifecycle(store):
    pid = save_preset(store, _preset(uniforms=None))
    assert pid == 1

    got = get_preset(store, 1)
    assert got.id == 1
    assert got.name == "glow"
    assert got.language == "glsl"
    assert got.uniforms is None
    assert got.created_at == got.updated_at

    first = got
    assert save_preset(store, first.model_copy(update={"name": "glow2"})) == 1
    got = get_preset(store, 1)
    assert got.name == "glow2"
    assert got.created_at == first.created_at
    assert got.updated_at > first.updated_at

    delete_preset(store, 1)
    assert get_preset(store, 1) is None


def test_insert_round_trips_fields(store):
    src = _preset(name="bars", uniforms='{"speed": 0.5}', language="wgsl")
    pid = save_preset(store, src)
    got = get_preset(store, pid)
    assert got.model_dump(exclude={"id", "created_at", "updated_at"}) == \
        src.model_dump(exclude={"id", "created_at", "updated_at"})
    assert got.created_at is not None


def test_insert_uses_one_clock_read(store, clock):
    before = clock.reads
    pid = save_preset(store, _preset())
    assert clock.reads - before == 1
    got = get_preset(store, pid)
    assert got.created_at == got.updated_at == "2025-01-01T12:00:00.000000+00:00"


def test_client_timestamps_are_ignored(store):
    pid = save_preset(store, _preset(created_at="1999-01-01T00:00:00", updated_at="1999-01-01T00:00:00"))
    got = get_preset(store, pid)
    assert got.created_at.startswith("2025-")
    assert got.updated_at.startswith("2025-")

    save_preset(store, got.model_copy(update={"created_at": "1999-01-01T00:00:00"}))
    again = get_preset(store, pid)
    assert again.created_at == got.created_at


def test_update_overwrites_all_fields(store):
    pid = save_preset(store, _preset(uniforms='{"a": 1}'))
    save_preset(store, Preset(id=pid, name="n", shader_code="x", language="wgsl", uniforms=None))
    got = get_preset(store, pid)
    assert (got.name, got.shader_code, got.language, got.uniforms) == ("n", "x", "wgsl", None)


def test_update_of_missing_id_is_lenient(store, caplog):
    caplog.set_level(logging.WARNING)
    assert save_preset(store, _preset(id=42)) == 42
    assert get_preset(store, 42) is None
    assert list_presets(store) == []
    assert any("id=42" in r.getMessage() for r in caplog.records)


def test_get_missing_returns_none(store):
    assert get_preset(store, 999) is None


def test_delete_missing_is_not_an_error(store):
    delete_preset(store, 999)
    pid = save_preset(store, _preset())
    delete_preset(store, pid)
    delete_preset(store, pid)
    assert get_preset(store, pid) is None


def test_list_is_recency_ordered(store):
    a = save_preset(store, _preset(name="a"))
    b = save_preset(store, _preset(name="b"))
    c = save_preset(store, _preset(name="c"))
    assert [p.id for p in list_presets(store)] == [c, b, a]

    save_preset(store, get_preset(store, a).model_copy(update={"shader_code": "changed"}))
    listed = list_presets(store)
    assert [p.id for p in listed] == [a, c, b]
    stamps = [p.updated_at for p in listed]
    assert stamps == sorted(stamps, reverse=True)


def test_list_empty(store):
    assert list_presets(store) == []


def test_ids_are_never_reused(store):
    a = save_preset(store, _preset(name="a"))
    delete_preset(store, a)
    b = save_preset(store, _preset(name="b"))
    assert b > a


def test_works_against_file_store(file_store):
    pid = save_preset(file_store, _preset())
    assert get_preset(file_store, pid).name == "glow"
