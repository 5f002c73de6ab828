from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BaseModel, Field, TypeAdapter

# SQLite INTEGER is a signed 64-bit value
RecordId = Annotated[int, Field(ge=-(2**63), le=2**63 - 1)]
record_id_adapter = TypeAdapter(RecordId)


class Preset(BaseModel):
    """A saved shader program with its language tag and optional uniform values."""
    id: Optional[RecordId] = None
    name: str = Field(min_length=1)
    shader_code: str
    language: str
    uniforms: str | None = None  # JSON
    created_at: str | None = None
    updated_at: str | None = None


class Project(BaseModel):
    """A saved bundle of shader definitions plus optional audio configuration."""
    id: Optional[RecordId] = None
    name: str
    shaders: str  # JSON
    audio_settings: str | None = None  # JSON
    created_at: str | None = None
    updated_at: str | None = None
