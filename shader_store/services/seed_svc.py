"""
Built-in presets shipped with the app.

Seeding never overwrites: a default whose name already exists is skipped.
"""
from __future__ import annotations

import logging

from ..db import Store
from ..models import Preset
from .preset_svc import list_presets, save_preset

logger = logging.getLogger(__name__)

DEFAULT_PRESETS = [
    Preset(
        name="Classic Rainbow",
        shader_code="""precision highp float;
uniform float time;
uniform vec2 resolution;

void main() {
    vec2 uv = gl_FragCoord.xy / resolution.xy;
    vec3 col = 0.5 + 0.5 * cos(time + uv.xyx + vec3(0,2,4));
    gl_FragColor = vec4(col, 1.0);
}""",
        language="glsl",
        uniforms="[]",
    ),
    Preset(
        name="Audio Reactive Circles",
        shader_code="""precision highp float;
uniform float time;
uniform vec2 resolution;
uniform float audioVolume;
uniform float audioBass;

void main() {
    vec2 uv = gl_FragCoord.xy / resolution.xy - 0.5;
    float radius = 0.3 + audioBass * 0.2;
    float dist = length(uv);
    vec3 col = vec3(0.0);
    if (dist < radius) {
        col = vec3(1.0, 0.5, 0.0) * audioVolume;
    }
    gl_FragColor = vec4(col, 1.0);
}""",
        language="glsl",
        uniforms="[]",
    ),
]


def seed_default_presets(store: Store) -> list[int]:
    existing = {p.name for p in list_presets(store)}
    ids = []
    for preset in DEFAULT_PRESETS:
        if preset.name in existing:
            continue
        ids.append(save_preset(store, preset.model_copy()))
    logger.info("Seeded %d default presets", len(ids))
    return ids
