"""Build the publisher selected in configuration."""

from __future__ import annotations

from loguru import logger

from techdocs.exceptions import ConfigError
from techdocs.publish.publisher import Publisher
from techdocs.settings import Settings
from techdocs.storage.local import LocalStorage
from techdocs.storage.s3 import S3Storage


def create_publisher(settings: Settings, *, s3_client=None) -> Publisher:
    """Construct the publisher for ``settings.publisher.type``.

    For ``aws_s3`` a bucket probe is scheduled on the running event loop
    (see :meth:`Publisher.start_connectivity_check`); the returned publisher
    may therefore not be usable yet.

    Raises:
        ConfigError: If required settings are missing or invalid.
    """
    publisher_settings = settings.publisher
    if publisher_settings.type == "aws_s3":
        aws = publisher_settings.aws_s3
        credentials = aws.parsed_credentials()
        storage = S3Storage(
            aws.bucket_name,
            client=s3_client,
            credentials=credentials,
            region=aws.region,
            endpoint_url=aws.endpoint_url,
        )
        publisher = Publisher(storage, upload_concurrency=settings.upload_concurrency)
        publisher.start_connectivity_check()
    elif publisher_settings.type == "local":
        storage = LocalStorage(publisher_settings.local.publish_directory)
        publisher = Publisher(storage, upload_concurrency=settings.upload_concurrency)
    else:
        raise ConfigError(f"Unknown publisher type: {publisher_settings.type}")

    logger.info(
        "Using {type} publisher at {location}",
        type=publisher_settings.type,
        location=publisher.location,
    )
    return publisher


__all__ = ["create_publisher"]
