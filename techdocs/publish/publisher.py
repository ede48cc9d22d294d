"""Publish generated docs sites to object storage and serve them back."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse, Response
from loguru import logger

from techdocs.exceptions import (
    ConnectivityError,
    ReadError,
    StorageError,
    UploadError,
)
from techdocs.publish.entity import EntityName, to_entity_name
from techdocs.publish.helpers import (
    get_content_type,
    get_file_tree_recursively,
    get_headers_for_file_extension,
)
from techdocs.storage import ObjectStorage

METADATA_FILE = "techdocs_metadata.json"
INDEX_FILE = "index.html"
DEFAULT_UPLOAD_CONCURRENCY = 10


@dataclass
class PublishResult:
    entity: EntityName
    object_keys: list[str] = field(default_factory=list)

    @property
    def file_count(self) -> int:
        return len(self.object_keys)

    def to_dict(self) -> dict[str, Any]:
        return {
            "entity": str(self.entity),
            "file_count": self.file_count,
            "object_keys": list(self.object_keys),
        }


def _read_file(path: Path) -> bytes:
    return path.read_bytes()


def _retrieve_exception(task: asyncio.Task) -> None:
    # Failures are logged inside the task; mark them retrieved for the loop
    if not task.cancelled():
        task.exception()


class Publisher:
    """Uploads, serves and inspects docs sites stored under ``namespace/kind/name``.

    One instance wraps one configured storage handle and is shared by all
    requests for the lifetime of the process.
    """

    def __init__(
        self,
        storage: ObjectStorage,
        *,
        location: str | None = None,
        upload_concurrency: int = DEFAULT_UPLOAD_CONCURRENCY,
    ) -> None:
        if upload_concurrency < 1:
            raise ValueError("upload_concurrency must be at least 1")
        self.storage = storage
        self.location = location or getattr(storage, "location", type(storage).__name__)
        self.upload_concurrency = upload_concurrency
        self.connectivity_check: asyncio.Task | None = None

    # ------------------------------------------------------------------
    # Construction & validation
    # ------------------------------------------------------------------

    async def check_connectivity(self) -> None:
        """Probe the storage location.

        Raises:
            ConnectivityError: If the bucket (or directory) cannot be reached.
        """
        probe = getattr(self.storage, "probe", None)
        if probe is None:
            return
        try:
            await asyncio.to_thread(probe)
        except StorageError as exc:
            logger.error(
                "Could not retrieve metadata about {location}. Make sure the bucket exists and "
                "the credentials in publisher.aws_s3.credentials are allowed to create objects in it.",
                location=self.location,
            )
            raise ConnectivityError(f"from storage client library: {exc.message}", exc.details) from exc
        logger.info("Successfully connected to {location}.", location=self.location)

    def start_connectivity_check(self) -> asyncio.Task | None:
        """Schedule :meth:`check_connectivity` on the running loop, if any.

        The returned task is also kept as ``connectivity_check``; awaiting it
        raises ``ConnectivityError`` when the probe failed.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return None
        task = loop.create_task(self.check_connectivity())
        task.add_done_callback(_retrieve_exception)
        self.connectivity_check = task
        return task

    # ------------------------------------------------------------------
    # Publish
    # ------------------------------------------------------------------

    async def publish(self, entity: EntityName | Mapping[str, Any], directory: str | Path) -> PublishResult:
        """Upload all the files from the generated ``directory``.

        Directory structure used in the store is
        ``namespace/kind/name/<path relative to directory>``.

        The first failing read or upload is raised; uploads that have not
        started yet are cancelled, objects already written are left in place.
        """
        entity_name = to_entity_name(entity)
        files = await asyncio.to_thread(get_file_tree_recursively, Path(directory))
        semaphore = asyncio.Semaphore(self.upload_concurrency)

        async def _upload(path: Path, relative_path: str) -> str:
            key = entity_name.object_key(relative_path)
            async with semaphore:
                try:
                    data = await asyncio.to_thread(_read_file, path)
                except OSError as exc:
                    raise ReadError(f"Unable to read {path}: {exc}", {"path": str(path)}) from exc
                try:
                    await asyncio.to_thread(
                        self.storage.put_object, key, data, get_content_type(relative_path)
                    )
                except StorageError as exc:
                    raise UploadError(
                        f"Unable to upload file(s) to {self.location}. Error {exc.message}",
                        {"key": key},
                    ) from exc
            return key

        tasks = [asyncio.create_task(_upload(path, relative)) for path, relative in files]
        try:
            if tasks:
                await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        except asyncio.CancelledError:
            for task in tasks:
                task.cancel()
            raise

        failed = [task for task in tasks if task.done() and not task.cancelled() and task.exception()]
        if failed:
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
            error = failed[0].exception()
            logger.error(
                "Publishing docs for {entity} failed: {error}",
                entity=entity_name,
                error=error,
            )
            raise error

        result = PublishResult(entity=entity_name, object_keys=[task.result() for task in tasks])
        logger.info(
            "Successfully uploaded all the generated files for Entity {name}. Total number of files: {count}",
            name=entity_name.name,
            count=result.file_count,
        )
        return result

    # ------------------------------------------------------------------
    # Retrieval
    # ------------------------------------------------------------------

    def _read_streamed(self, key: str) -> bytes:
        return b"".join(self.storage.stream_object(key))

    async def fetch_techdocs_metadata(self, entity_name: EntityName | Mapping[str, Any]) -> str:
        """Return the raw ``techdocs_metadata.json`` of an entity.

        Raises:
            NotFoundError: If the entity has no metadata object.
        """
        key = to_entity_name(entity_name).object_key(METADATA_FILE)
        try:
            content = await asyncio.to_thread(self._read_streamed, key)
        except StorageError as exc:
            logger.error(exc.message)
            raise
        try:
            return content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise StorageError(f"{key} is not valid UTF-8: {exc}", {"key": key}) from exc

    async def fetch_techdocs_metadata_json(self, entity_name: EntityName | Mapping[str, Any]) -> Any:
        raw = await self.fetch_techdocs_metadata(entity_name)
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageError(f"{METADATA_FILE} is not valid JSON: {exc}") from exc

    async def serve_file(self, request_path: str) -> Response:
        """Answer a request for one file of a published site.

        ``request_path`` is the full object key, e.g.
        ``/default/Component/documented-component/index.html``.
        """
        file_path = request_path[1:] if request_path.startswith("/") else request_path

        # Files with different extensions (CSS, HTML) need different headers
        headers = get_headers_for_file_extension(PurePosixPath(file_path).suffix)

        try:
            content = await asyncio.to_thread(self._read_streamed, file_path)
        except StorageError as exc:
            logger.warning(exc.message)
            return PlainTextResponse(exc.message or f"Not found: {file_path}", status_code=404)
        return Response(content=content, headers=headers)

    def docs_router(self) -> APIRouter:
        """Router serving static files of published sites, mounted under a prefix."""
        router = APIRouter()

        @router.get("/{file_path:path}", include_in_schema=False)
        async def serve_docs(file_path: str) -> Response:
            return await self.serve_file(f"/{file_path}")

        return router

    async def has_docs_been_generated(self, entity: EntityName | Mapping[str, Any]) -> bool:
        """Check whether ``index.html`` of an entity's docs site is available."""
        key = to_entity_name(entity).object_key(INDEX_FILE)
        try:
            await asyncio.to_thread(self.storage.head_object, key)
        except Exception as exc:
            logger.debug("No generated docs at {key}: {error}", key=key, error=exc)
            return False
        return True


__all__ = [
    "Publisher",
    "PublishResult",
    "METADATA_FILE",
    "INDEX_FILE",
    "DEFAULT_UPLOAD_CONCURRENCY",
]
