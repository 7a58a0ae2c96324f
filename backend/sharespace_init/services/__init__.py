"""
Services package - provisioning steps and the full run.
"""
from sharespace_init.services.provisioner import (
    AppCredentials,
    ProvisionConfig,
    ProvisionReport,
    create_application_user,
    define_collection,
    create_index,
    provision,
)

__all__ = [
    "AppCredentials",
    "ProvisionConfig",
    "ProvisionReport",
    "create_application_user",
    "define_collection",
    "create_index",
    "provision",
]
