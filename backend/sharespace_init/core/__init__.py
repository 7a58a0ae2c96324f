"""
Core helpers - error types and validator rule-set checks.
"""
from sharespace_init.core.errors import (
    ProvisioningError,
    DuplicateResourceError,
    ValidationSchemaError,
    ConnectivityError,
)
from sharespace_init.core.schema_check import check_schema, validate_document

__all__ = [
    "ProvisioningError",
    "DuplicateResourceError",
    "ValidationSchemaError",
    "ConnectivityError",
    "check_schema",
    "validate_document",
]
