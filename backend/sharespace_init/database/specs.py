"""
Declarative provisioning units: collections with validators and indexes.
"""
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from sharespace_init.core.errors import ValidationSchemaError
from sharespace_init.core.schema_check import check_schema

VALIDATION_LEVELS = ("off", "strict", "moderate")
VALIDATION_ACTIONS = ("error", "warn")


@dataclass(frozen=True)
class CollectionSpec:
    """A collection and the validator the server enforces on every write."""
    name: str
    schema: dict[str, Any]
    validation_level: str = "strict"
    validation_action: str = "error"

    def __post_init__(self):
        if not self.name:
            raise ValidationSchemaError("collection name must not be empty")
        if self.validation_level not in VALIDATION_LEVELS:
            raise ValidationSchemaError(f"{self.name}: unknown validationLevel {self.validation_level!r}")
        if self.validation_action not in VALIDATION_ACTIONS:
            raise ValidationSchemaError(f"{self.name}: unknown validationAction {self.validation_action!r}")
        check_schema(self.schema, f"{self.name}.$jsonSchema")

    @property
    def options(self) -> dict[str, Any]:
        """Validator options shared by `create` and `collMod`."""
        return {
            "validator": {"$jsonSchema": self.schema},
            "validationLevel": self.validation_level,
            "validationAction": self.validation_action,
        }


@dataclass(frozen=True)
class IndexSpec:
    """
    An index on one collection.

    keys: (field, direction) pairs, direction 1 or -1. Array-valued fields
    become multikey indexes on the server without extra options.
    """
    collection: str
    keys: list[tuple[str, int]] = field(default_factory=list)
    unique: bool = False
    sparse: bool = False

    def __post_init__(self):
        if not self.keys:
            raise ValidationSchemaError(f"{self.collection}: index needs at least one key")
        fields = [name for name, _ in self.keys]
        if len(set(fields)) != len(fields):
            raise ValidationSchemaError(f"{self.collection}: duplicate field in index keys {fields}")
        for name, direction in self.keys:
            if not name or direction not in (1, -1) or isinstance(direction, bool):
                raise ValidationSchemaError(
                    f"{self.collection}: invalid index key ({name!r}, {direction!r})"
                )

    @property
    def name(self) -> str:
        """Server default index name, e.g. `menteeId_1_status_1`."""
        return "_".join(f"{name}_{direction}" for name, direction in self.keys)

    @property
    def options(self) -> dict[str, Any]:
        options = {}
        if self.unique:
            options["unique"] = True
        if self.sparse:
            options["sparse"] = True
        return options

    def matches(self, info: dict[str, Any]) -> bool:
        """Whether an `index_information()` entry describes this index."""
        key = info.get("key", [])
        items = key.items() if isinstance(key, Mapping) else key
        keys = [(name, direction) for name, direction in items]
        return (
            keys == list(self.keys)
            and bool(info.get("unique", False)) == self.unique
            and bool(info.get("sparse", False)) == self.sparse
        )

    def describe(self) -> str:
        flags = [flag for flag in ("unique", "sparse") if getattr(self, flag)]
        suffix = f" ({', '.join(flags)})" if flags else ""
        return f"{self.collection}.{self.name}{suffix}"
