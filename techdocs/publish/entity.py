from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

DEFAULT_NAMESPACE = "default"
_RESERVED_SEGMENTS = frozenset({".", ".."})


@dataclass(frozen=True)
class EntityName:
    """Identity of a catalog entity whose docs live under ``namespace/kind/name``."""

    namespace: str
    kind: str
    name: str

    def __post_init__(self) -> None:
        for field_name in ("namespace", "kind", "name"):
            value = getattr(self, field_name)
            if not isinstance(value, str) or not value:
                raise ValueError(f"Entity {field_name} must be a non-empty string")
            # Each part is exactly one key segment
            if "/" in value or "\\" in value or "\x00" in value or value in _RESERVED_SEGMENTS:
                raise ValueError(f"Entity {field_name} is not a valid path segment: {value!r}")

    @property
    def root_dir(self) -> str:
        return f"{self.namespace}/{self.kind}/{self.name}"

    def object_key(self, relative_path: str) -> str:
        return f"{self.root_dir}/{relative_path}"

    @classmethod
    def parse(cls, ref: str) -> "EntityName":
        """Parse a ``namespace/kind/name`` reference."""
        parts = ref.strip("/").split("/")
        if len(parts) != 3:
            raise ValueError(f"Entity reference must look like namespace/kind/name, got {ref!r}")
        return cls(*parts)

    @classmethod
    def from_entity(cls, entity: Mapping[str, Any]) -> "EntityName":
        """Build the identity of a catalog entity descriptor."""
        metadata = entity.get("metadata") or {}
        return cls(
            namespace=metadata.get("namespace") or DEFAULT_NAMESPACE,
            kind=entity.get("kind", ""),
            name=metadata.get("name", ""),
        )

    def __str__(self) -> str:
        return self.root_dir


def to_entity_name(entity: EntityName | Mapping[str, Any]) -> EntityName:
    if isinstance(entity, EntityName):
        return entity
    return EntityName.from_entity(entity)


__all__ = ["EntityName", "DEFAULT_NAMESPACE", "to_entity_name"]
