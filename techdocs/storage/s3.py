from __future__ import annotations

from typing import Any, Iterator

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from techdocs.exceptions import NotFoundError, StorageError
from techdocs.settings import AwsCredentials
from techdocs.storage import DEFAULT_CHUNK_SIZE

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


def _error_message(exc: Exception) -> str:
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        return error.get("Message") or error.get("Code") or str(exc)
    return str(exc)


def _translate(exc: Exception, key: str) -> StorageError:
    message = _error_message(exc)
    if isinstance(exc, ClientError) and str(exc.response.get("Error", {}).get("Code")) in _NOT_FOUND_CODES:
        return NotFoundError(message, {"key": key})
    return StorageError(message, {"key": key})


class S3Storage:
    def __init__(
        self,
        bucket: str,
        *,
        client: Any | None = None,
        credentials: AwsCredentials | None = None,
        region: str | None = None,
        endpoint_url: str | None = None,
    ) -> None:
        self.bucket = bucket
        if client is None:
            session_kwargs: dict[str, Any] = credentials.to_client_kwargs() if credentials else {}
            if region:
                session_kwargs["region_name"] = region
            session = boto3.session.Session(**session_kwargs)
            client = session.client("s3", endpoint_url=endpoint_url)
        self.client = client

    @property
    def location(self) -> str:
        return f"s3://{self.bucket}"

    def uri(self, key: str) -> str:
        return f"s3://{self.bucket}/{key}"

    def probe(self) -> None:
        """Issue a metadata request against the bucket itself."""
        try:
            self.client.head_bucket(Bucket=self.bucket)
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(_error_message(exc), {"bucket": self.bucket}) from exc

    def put_object(self, key: str, data: bytes, content_type: str | None = None) -> str:
        params: dict[str, Any] = {"Bucket": self.bucket, "Key": key, "Body": data}
        if content_type:
            params["ContentType"] = content_type
        try:
            self.client.put_object(**params)
        except (BotoCoreError, ClientError) as exc:
            raise _translate(exc, key) from exc
        return self.uri(key)

    def get_object(self, key: str) -> bytes:
        return b"".join(self.stream_object(key))

    def head_object(self, key: str) -> dict[str, Any]:
        try:
            return self.client.head_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as exc:
            raise _translate(exc, key) from exc

    def stream_object(self, key: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
        try:
            body = self.client.get_object(Bucket=self.bucket, Key=key)["Body"]
        except (BotoCoreError, ClientError) as exc:
            raise _translate(exc, key) from exc
        try:
            yield from body.iter_chunks(chunk_size)
        except (BotoCoreError, ClientError) as exc:
            raise _translate(exc, key) from exc
        finally:
            body.close()


__all__ = ["S3Storage"]
