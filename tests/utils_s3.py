from __future__ import annotations

import io
import threading
from pathlib import Path
from typing import Any

from botocore.exceptions import ClientError
from botocore.response import StreamingBody


def _client_error(code: str, message: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class FakeS3Client:
    """In-memory stand-in for ``boto3.client("s3")`` covering the calls we make."""

    def __init__(self, bucket: str = "techdocs-test", *, fail_keys: set[str] | None = None) -> None:
        self.bucket = bucket
        self.store: dict[str, bytes] = {}
        self.content_types: dict[str, str | None] = {}
        self.fail_keys = set(fail_keys or ())
        self.bucket_reachable = True
        self._lock = threading.Lock()

    def _check_bucket(self, bucket: str, operation: str) -> None:
        if bucket != self.bucket or not self.bucket_reachable:
            raise _client_error("NoSuchBucket", "The specified bucket does not exist", operation)

    def head_bucket(self, Bucket: str) -> dict[str, Any]:
        self._check_bucket(Bucket, "HeadBucket")
        return {}

    def put_object(self, Bucket: str, Key: str, Body: bytes, ContentType: str | None = None) -> dict[str, Any]:
        self._check_bucket(Bucket, "PutObject")
        if Key in self.fail_keys:
            raise _client_error("AccessDenied", f"Access Denied for {Key}", "PutObject")
        with self._lock:
            self.store[Key] = bytes(Body)
            self.content_types[Key] = ContentType
        return {"ETag": '"fake"'}

    def get_object(self, Bucket: str, Key: str) -> dict[str, Any]:
        self._check_bucket(Bucket, "GetObject")
        if Key not in self.store:
            raise _client_error("NoSuchKey", "The specified key does not exist.", "GetObject")
        data = self.store[Key]
        return {"Body": StreamingBody(io.BytesIO(data), len(data)), "ContentLength": len(data)}

    def head_object(self, Bucket: str, Key: str) -> dict[str, Any]:
        self._check_bucket(Bucket, "HeadObject")
        if Key not in self.store:
            raise _client_error("404", "Not Found", "HeadObject")
        return {"ContentLength": len(self.store[Key])}


def write_site(root: Path, files: dict[str, bytes]) -> Path:
    """Create a generated-site directory with ``files`` keyed by relative path."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    return root
