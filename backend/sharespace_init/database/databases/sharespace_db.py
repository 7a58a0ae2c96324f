"""
ShareSpace database configuration.
Stores users and the mentorship workflow.

Structure:
- users: Accounts, anonymous identity and mentorship profile
- mentorship_requests: Requests from a mentee to a mentor
- mentorship_connections: One connection per accepted request
- _metadata: Provisioning metadata
"""
from sharespace_init.database.specs import CollectionSpec, IndexSpec
from sharespace_init.database.validators import (
    users_schema,
    mentorship_requests_schema,
    mentorship_connections_schema,
)

DB_NAME = "sharespace"

# Bumped whenever a validator or the index plan changes
SCHEMA_VERSION = "1.0"


class Collections:
    """Collection names in the sharespace database."""
    USERS = "users"
    MENTORSHIP_REQUESTS = "mentorship_requests"
    MENTORSHIP_CONNECTIONS = "mentorship_connections"
    METADATA = "_metadata"

    # Validator for each collection
    VALIDATORS = {
        "users": users_schema,
        "mentorship_requests": mentorship_requests_schema,
        "mentorship_connections": mentorship_connections_schema,
    }

    # Index definitions for each collection
    INDEXES = {
        "users": [
            {"keys": [("username", 1)], "unique": True},
            {"keys": [("email", 1)], "unique": True},
            {"keys": [("displayName", 1)], "unique": True, "sparse": True},
            {"keys": [("isMentor", 1), ("availableForMentoring", 1)]},
            {"keys": [("isMentee", 1)]},
            {"keys": [("mentorshipTopics", 1)]},  # Multikey
        ],
        "mentorship_requests": [
            {"keys": [("menteeId", 1)]},
            {"keys": [("mentorId", 1)]},
            {"keys": [("status", 1)]},
            {"keys": [("menteeId", 1), ("mentorId", 1), ("status", 1)]},
            {"keys": [("createdAt", 1)]},
            {"keys": [("topics", 1)]},  # Multikey
        ],
        "mentorship_connections": [
            {"keys": [("menteeId", 1)]},
            {"keys": [("mentorId", 1)]},
            {"keys": [("requestId", 1)], "unique": True},
            {"keys": [("status", 1)]},
            {"keys": [("startedAt", 1)]},
            {"keys": [("topics", 1)]},  # Multikey
            {"keys": [("menteeId", 1), ("status", 1)]},
            {"keys": [("mentorId", 1), ("status", 1)]},
        ],
    }


# Provisioning order: collections first, then indexes
COLLECTION_SPECS = [
    CollectionSpec(name=name, schema=schema)
    for name, schema in Collections.VALIDATORS.items()
]

INDEX_PLAN = [
    IndexSpec(collection=collection_name, **index_def)
    for collection_name, indexes in Collections.INDEXES.items()
    for index_def in indexes
]


# Manifest for the provisioning metadata record
DB_MANIFEST = {
    "db_name": DB_NAME,
    "purpose": "ShareSpace users and mentorship workflow",
    "collections": [
        Collections.USERS,
        Collections.MENTORSHIP_REQUESTS,
        Collections.MENTORSHIP_CONNECTIONS,
        Collections.METADATA,
    ],
    "schema_version": SCHEMA_VERSION,
}
