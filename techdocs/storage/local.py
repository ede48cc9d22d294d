from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator

from techdocs.exceptions import NotFoundError, StorageError
from techdocs.storage import DEFAULT_CHUNK_SIZE


class LocalStorage:
    def __init__(self, root: Path) -> None:
        self.root = root.resolve()
        self.root.mkdir(parents=True, exist_ok=True)

    @property
    def location(self) -> str:
        return str(self.root)

    def probe(self) -> None:
        if not self.root.is_dir():
            raise StorageError(f"Storage root is not a directory: {self.root}", {"root": str(self.root)})

    def _path(self, key: str) -> Path:
        try:
            path = (self.root / key).resolve()
        except (OSError, ValueError) as exc:
            raise StorageError(f"Invalid key {key!r}: {exc}", {"key": key}) from exc
        if path != self.root and self.root not in path.parents:
            raise StorageError(f"Key escapes storage root: {key}", {"key": key})
        return path

    def _existing(self, key: str) -> Path:
        path = self._path(key)
        try:
            is_file = path.is_file()
        except OSError as exc:
            raise StorageError(f"Could not access {key}: {exc}", {"key": key}) from exc
        if not is_file:
            raise NotFoundError(f"The specified key does not exist: {key}", {"key": key})
        return path

    def put_object(self, key: str, data: bytes, content_type: str | None = None) -> str:
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise StorageError(f"Could not write {key}: {exc}", {"key": key}) from exc
        return str(path)

    def get_object(self, key: str) -> bytes:
        path = self._existing(key)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise StorageError(f"Could not read {key}: {exc}", {"key": key}) from exc

    def head_object(self, key: str) -> dict[str, Any]:
        path = self._existing(key)
        try:
            stat = path.stat()
        except OSError as exc:
            raise StorageError(f"Could not stat {key}: {exc}", {"key": key}) from exc
        return {"ContentLength": stat.st_size, "LastModified": stat.st_mtime}

    def stream_object(self, key: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
        path = self._existing(key)
        try:
            with path.open("rb") as fp:
                while True:
                    chunk = fp.read(chunk_size)
                    if not chunk:
                        break
                    yield chunk
        except OSError as exc:
            raise StorageError(f"Could not read {key}: {exc}", {"key": key}) from exc


__all__ = ["LocalStorage"]
