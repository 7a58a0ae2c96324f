"""
In-memory handling of MongoDB `$jsonSchema` rule sets.

- check_schema: syntax check of a rule set before it is sent to the server
- validate_document: evaluate a document against a rule set the way the
  server's validator would, for the keyword subset used by the collections

Only the `$jsonSchema` keywords listed in SUPPORTED_KEYWORDS are accepted.
Type names follow BSON, not JSON: `int` is a 32-bit integer, `bool` never
matches an integer and `objectId` / `date` map to `bson.ObjectId` and
`datetime`.
"""
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Callable

from bson import Binary, Decimal128, Int64, ObjectId, Timestamp

from sharespace_init.core.errors import ValidationSchemaError

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

SUPPORTED_KEYWORDS = {
    "bsonType",
    "required",
    "properties",
    "additionalProperties",
    "items",
    "enum",
    "minLength",
    "maxLength",
    "pattern",
    "minimum",
    "maximum",
    "minItems",
    "maxItems",
    "title",
    "description",
}


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_int32(value: Any) -> bool:
    return _is_integer(value) and not isinstance(value, Int64) and INT32_MIN <= value <= INT32_MAX


def _is_int64(value: Any) -> bool:
    if isinstance(value, Int64):
        return True
    # pymongo encodes plain ints as int64 only when they overflow int32
    return _is_integer(value) and INT64_MIN <= value <= INT64_MAX and not _is_int32(value)


def _is_number(value: Any) -> bool:
    return _is_integer(value) or isinstance(value, (float, Decimal128))


BSON_TYPE_CHECKS: dict[str, Callable[[Any], bool]] = {
    "object": lambda v: isinstance(v, Mapping),
    "array": lambda v: isinstance(v, (list, tuple)),
    "string": lambda v: isinstance(v, str),
    "bool": lambda v: isinstance(v, bool),
    "int": _is_int32,
    "long": _is_int64,
    "double": lambda v: isinstance(v, float),
    "decimal": lambda v: isinstance(v, Decimal128),
    "number": _is_number,
    "objectId": lambda v: isinstance(v, ObjectId),
    "date": lambda v: isinstance(v, datetime),
    "timestamp": lambda v: isinstance(v, Timestamp),
    "binData": lambda v: isinstance(v, (bytes, Binary)),
    "null": lambda v: v is None,
}


def _join(where: str, name: str) -> str:
    return f"{where}.{name}" if where else name


# ==================== Rule-set syntax ====================

def _check_count(schema: Mapping, keyword: str, where: str) -> None:
    value = schema[keyword]
    if not _is_integer(value) or value < 0:
        raise ValidationSchemaError(f"{where}: '{keyword}' must be a non-negative integer")


def _check_bounds(schema: Mapping, low: str, high: str, where: str) -> None:
    if low in schema and high in schema and schema[low] > schema[high]:
        raise ValidationSchemaError(f"{where}: '{low}' is greater than '{high}'")


def check_schema(schema: Any, where: str = "$jsonSchema") -> None:
    """
    Check that a rule set is well formed.

    Args:
        schema: The `$jsonSchema` body (without the `$jsonSchema` wrapper)
        where: Location prefix used in error messages

    Raises:
        ValidationSchemaError: On the first malformed keyword
    """
    if not isinstance(schema, Mapping):
        raise ValidationSchemaError(f"{where}: rule set must be a mapping")

    unknown = set(schema) - SUPPORTED_KEYWORDS
    if unknown:
        raise ValidationSchemaError(f"{where}: unsupported keyword(s) {sorted(unknown)}")

    if "bsonType" in schema:
        bson_type = schema["bsonType"]
        types = [bson_type] if isinstance(bson_type, str) else bson_type
        if not isinstance(types, list) or not types:
            raise ValidationSchemaError(f"{where}: 'bsonType' must be a type name or a list of them")
        for name in types:
            if name not in BSON_TYPE_CHECKS:
                raise ValidationSchemaError(f"{where}: unknown bsonType {name!r}")

    if "required" in schema:
        required = schema["required"]
        if (
            not isinstance(required, list)
            or not required
            or not all(isinstance(name, str) for name in required)
            or len(set(required)) != len(required)
        ):
            raise ValidationSchemaError(f"{where}: 'required' must be a non-empty list of distinct field names")

    if "properties" in schema:
        properties = schema["properties"]
        if not isinstance(properties, Mapping):
            raise ValidationSchemaError(f"{where}: 'properties' must be a mapping")
        for name, sub_schema in properties.items():
            check_schema(sub_schema, f"{where}.{name}")

    if "additionalProperties" in schema:
        additional = schema["additionalProperties"]
        if isinstance(additional, Mapping):
            check_schema(additional, f"{where}.<additional>")
        elif not isinstance(additional, bool):
            raise ValidationSchemaError(f"{where}: 'additionalProperties' must be a bool or a rule set")

    if "items" in schema:
        check_schema(schema["items"], f"{where}[]")

    if "enum" in schema:
        if not isinstance(schema["enum"], list) or not schema["enum"]:
            raise ValidationSchemaError(f"{where}: 'enum' must be a non-empty list")

    for keyword in ("minLength", "maxLength", "minItems", "maxItems"):
        if keyword in schema:
            _check_count(schema, keyword, where)

    for keyword in ("minimum", "maximum"):
        if keyword in schema and not (_is_integer(schema[keyword]) or isinstance(schema[keyword], float)):
            raise ValidationSchemaError(f"{where}: '{keyword}' must be a number")

    _check_bounds(schema, "minLength", "maxLength", where)
    _check_bounds(schema, "minItems", "maxItems", where)
    _check_bounds(schema, "minimum", "maximum", where)

    if "pattern" in schema:
        pattern = schema["pattern"]
        if not isinstance(pattern, str):
            raise ValidationSchemaError(f"{where}: 'pattern' must be a string")
        try:
            re.compile(pattern)
        except re.error as e:
            raise ValidationSchemaError(f"{where}: invalid pattern {pattern!r}: {e}") from e

    for keyword in ("title", "description"):
        if keyword in schema and not isinstance(schema[keyword], str):
            raise ValidationSchemaError(f"{where}: '{keyword}' must be a string")


# ==================== Document validation ====================

def _validate(schema: Mapping, value: Any, where: str, errors: list[str]) -> None:
    label = where or "document"

    if "bsonType" in schema:
        bson_type = schema["bsonType"]
        types = [bson_type] if isinstance(bson_type, str) else bson_type
        if not any(BSON_TYPE_CHECKS[name](value) for name in types):
            errors.append(f"{label}: expected bsonType {' or '.join(types)}, got {type(value).__name__}")
            return

    if "enum" in schema and value not in schema["enum"]:
        errors.append(f"{label}: {value!r} is not one of {schema['enum']}")

    if isinstance(value, str):
        if "minLength" in schema and len(value) < schema["minLength"]:
            errors.append(f"{label}: shorter than {schema['minLength']} characters")
        if "maxLength" in schema and len(value) > schema["maxLength"]:
            errors.append(f"{label}: longer than {schema['maxLength']} characters")
        if "pattern" in schema and re.search(schema["pattern"], value) is None:
            errors.append(f"{label}: does not match pattern {schema['pattern']!r}")

    if _is_integer(value) or isinstance(value, float):
        if "minimum" in schema and value < schema["minimum"]:
            errors.append(f"{label}: less than minimum {schema['minimum']}")
        if "maximum" in schema and value > schema["maximum"]:
            errors.append(f"{label}: greater than maximum {schema['maximum']}")

    if isinstance(value, (list, tuple)):
        if "minItems" in schema and len(value) < schema["minItems"]:
            errors.append(f"{label}: fewer than {schema['minItems']} item(s)")
        if "maxItems" in schema and len(value) > schema["maxItems"]:
            errors.append(f"{label}: more than {schema['maxItems']} item(s)")
        if "items" in schema:
            for index, item in enumerate(value):
                _validate(schema["items"], item, f"{label}[{index}]", errors)

    if isinstance(value, Mapping):
        for name in schema.get("required", []):
            if name not in value:
                errors.append(f"{_join(where, name)}: required field missing")

        properties = schema.get("properties", {})
        for name, sub_schema in properties.items():
            if name in value:
                _validate(sub_schema, value[name], _join(where, name), errors)

        additional = schema.get("additionalProperties", True)
        if additional is not True:
            for name in value:
                if name in properties:
                    continue
                if additional is False:
                    errors.append(f"{_join(where, name)}: additional field not allowed")
                else:
                    _validate(additional, value[name], _join(where, name), errors)


def validate_document(schema: Mapping, document: Mapping) -> list[str]:
    """
    Validate a document against a `$jsonSchema` rule set in memory.

    Returns:
        List of violation messages; empty when the server would accept
        the document.
    """
    errors: list[str] = []
    _validate(schema, document, "", errors)
    return errors
