from __future__ import annotations

from pydantic import BaseModel, Field


class PublishRequest(BaseModel):
    directory: str = Field(..., min_length=1, description="Local directory holding the generated site")


class PublishResponse(BaseModel):
    entity: str
    file_count: int
    object_keys: list[str] = Field(default_factory=list)


class DocsExistResponse(BaseModel):
    entity: str
    exists: bool
