"""
Provisioning error types.
"""


class ProvisioningError(Exception):
    """Base error for a failed provisioning step."""


class DuplicateResourceError(ProvisioningError):
    """A principal, collection or index already exists (strict mode or conflicting definition)."""


class ValidationSchemaError(ProvisioningError):
    """A validator rule set or index definition is malformed."""


class ConnectivityError(ProvisioningError):
    """The database server cannot be reached."""
