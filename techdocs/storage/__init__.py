"""Storage abstraction (S3-compatible bucket or local filesystem)."""

from __future__ import annotations

from typing import Any, Iterator, Protocol

DEFAULT_CHUNK_SIZE = 64 * 1024


class ObjectStorage(Protocol):
    def put_object(self, key: str, data: bytes, content_type: str | None = None) -> str:  # returns uri
        ...

    def get_object(self, key: str) -> bytes:
        ...

    def head_object(self, key: str) -> dict[str, Any]:
        ...

    def stream_object(self, key: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
        ...


__all__ = ["ObjectStorage", "DEFAULT_CHUNK_SIZE"]
