from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from techdocs.exceptions import ConfigError

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = _PROJECT_ROOT / "config" / "default.yaml"

# Load .env file from project root
_env_path = _PROJECT_ROOT / ".env"
if _env_path.exists():
    load_dotenv(_env_path)


class AwsCredentials(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    access_key_id: str = Field(alias="accessKeyId")
    secret_access_key: str = Field(alias="secretAccessKey")
    session_token: str | None = Field(default=None, alias="sessionToken")

    def to_client_kwargs(self) -> dict[str, str]:
        kwargs = {
            "aws_access_key_id": self.access_key_id,
            "aws_secret_access_key": self.secret_access_key,
        }
        if self.session_token:
            kwargs["aws_session_token"] = self.session_token
        return kwargs


class AwsS3Settings(BaseModel):
    bucket_name: str | None = None
    credentials: str | None = None
    credentials_env: str = "TECHDOCS_AWS_CREDENTIALS"
    region: str | None = None
    endpoint_url: str | None = None

    @field_validator("bucket_name", "credentials", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def raw_credentials(self) -> str | None:
        return self.credentials or os.getenv(self.credentials_env) or None

    def parsed_credentials(self) -> AwsCredentials:
        """Parse the serialized credentials payload.

        Raises:
            ConfigError: If credentials or bucket name are missing, or the
                payload is not a JSON object with an access key pair.
        """
        raw = self.raw_credentials
        if not raw or not self.bucket_name:
            raise ConfigError(
                "Since publisher.type is set to 'aws_s3' in your config, "
                "credentials and bucket_name are required in publisher.aws_s3 "
                "to authenticate with AWS S3.",
                {"section": "publisher.aws_s3"},
            )
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ConfigError(
                "Error in parsing publisher.aws_s3.credentials config to JSON.",
                {"reason": str(exc)},
            ) from exc
        if not isinstance(payload, dict):
            raise ConfigError(
                "publisher.aws_s3.credentials must be a JSON object.",
                {"type": type(payload).__name__},
            )
        try:
            return AwsCredentials(**payload)
        except ValidationError as exc:
            raise ConfigError(
                "publisher.aws_s3.credentials must contain accessKeyId and secretAccessKey.",
                {"reason": str(exc)},
            ) from exc


class LocalPublisherSettings(BaseModel):
    publish_directory: Path = Path("data/static/docs")


class PublisherSettings(BaseModel):
    type: Literal["aws_s3", "local"] = "local"
    aws_s3: AwsS3Settings = Field(default_factory=AwsS3Settings)
    local: LocalPublisherSettings = Field(default_factory=LocalPublisherSettings)


class LoggingSettings(BaseModel):
    level: str = "INFO"
    json_format: bool = False
    file: Path | None = None


class Settings(BaseModel):
    publisher: PublisherSettings = Field(default_factory=PublisherSettings)
    upload_concurrency: int = Field(10, ge=1, le=256)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from YAML configuration file.

        Args:
            path: Optional path to configuration file. If not provided, uses
                TECHDOCS_CONFIG environment variable or defaults to
                config/default.yaml in the project root.

        Returns:
            Settings instance with loaded configuration.

        Raises:
            ConfigError: If the file does not exist or its content is invalid.
        """
        config_path = path or Path(os.getenv("TECHDOCS_CONFIG", str(DEFAULT_CONFIG_PATH)))
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}", {"path": str(config_path)})
        with config_path.open("r", encoding="utf-8") as fp:
            try:
                payload = yaml.safe_load(fp) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise ConfigError(f"Configuration must be a mapping: {config_path}", {"path": str(config_path)})
        try:
            return cls(**payload)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}", {"path": str(config_path)}) from exc


@lru_cache(maxsize=1)
def get_settings(path: str | None = None) -> Settings:
    return Settings.load(Path(path) if path else None)


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "Settings",
    "AwsCredentials",
    "AwsS3Settings",
    "LocalPublisherSettings",
    "PublisherSettings",
    "LoggingSettings",
    "get_settings",
]
