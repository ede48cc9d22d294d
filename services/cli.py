"""CLI for publishing generated docs sites and inspecting published ones."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from loguru import logger

from techdocs.exceptions import TechDocsError
from techdocs.logging_config import setup_logging
from techdocs.publish.entity import EntityName
from techdocs.publish.factory import create_publisher
from techdocs.publish.publisher import Publisher
from techdocs.settings import Settings


def _entity(value: str) -> EntityName:
    try:
        return EntityName.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Publish TechDocs sites to object storage")
    parser.add_argument("--config", type=Path, help="YAML configuration file (default: TECHDOCS_CONFIG)")
    parser.add_argument("--log-level", default=None, help="Override the configured log level")
    sub = parser.add_subparsers(dest="command", required=True)

    publish = sub.add_parser("publish", help="Upload a generated site directory")
    publish.add_argument("--entity", type=_entity, required=True, help="namespace/kind/name")
    publish.add_argument("--directory", type=Path, required=True, help="Directory with the generated site")

    exists = sub.add_parser("exists", help="Check whether docs have been generated for an entity")
    exists.add_argument("--entity", type=_entity, required=True, help="namespace/kind/name")

    metadata = sub.add_parser("metadata", help="Print techdocs_metadata.json of an entity")
    metadata.add_argument("--entity", type=_entity, required=True, help="namespace/kind/name")

    return parser


async def _run(args: argparse.Namespace, settings: Settings) -> int:
    publisher: Publisher = create_publisher(settings)
    if publisher.connectivity_check is not None:
        await publisher.connectivity_check

    if args.command == "publish":
        result = await publisher.publish(args.entity, args.directory)
        print(json.dumps(result.to_dict(), indent=2))
        return 0
    if args.command == "exists":
        exists = await publisher.has_docs_been_generated(args.entity)
        print(json.dumps({"entity": str(args.entity), "exists": exists}))
        return 0 if exists else 2
    if args.command == "metadata":
        print(await publisher.fetch_techdocs_metadata(args.entity))
        return 0
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = Settings.load(args.config)
        setup_logging(
            level=args.log_level or settings.logging.level,
            json_format=settings.logging.json_format,
            log_file=settings.logging.file,
        )
        return asyncio.run(_run(args, settings))
    except TechDocsError as exc:
        logger.error("{type}: {message}", type=type(exc).__name__, message=exc.message)
        print(f"error: {exc.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
