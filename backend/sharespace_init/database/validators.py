"""
`$jsonSchema` rule sets for the ShareSpace collections.

Plain data: passed to the server as collection validators and used in
memory by `sharespace_init.core.schema_check.validate_document`.
"""

EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

USER_ROLES = ["admin", "user"]
REQUEST_STATUSES = ["pending", "accepted", "rejected", "canceled"]
CONNECTION_STATUSES = ["active", "paused", "completed", "ended"]


def _bool(field: str) -> dict:
    return {"bsonType": "bool", "description": f"{field} must be a boolean"}


def _object_id(field: str) -> dict:
    return {"bsonType": "objectId", "description": f"{field} must be a valid ObjectId"}


def _topics() -> dict:
    return {
        "bsonType": "array",
        "minItems": 1,
        "items": {"bsonType": "string"},
        "description": "topics must be a non-empty array of strings",
    }


def _rating(field: str) -> dict:
    return {
        "bsonType": "int",
        "minimum": 1,
        "maximum": 5,
        "description": f"{field} must be between 1-5",
    }


users_schema = {
    "bsonType": "object",
    "required": ["username", "email", "password", "fullname", "role", "isVerified"],
    "properties": {
        "username": {
            "bsonType": "string",
            "minLength": 3,
            "maxLength": 30,
            "description": "Username must be a string between 3-30 characters",
        },
        "email": {
            "bsonType": "string",
            "pattern": EMAIL_PATTERN,
            "description": "Email must be a valid email address",
        },
        # Stored pre-hashed by the application
        "password": {
            "bsonType": "string",
            "minLength": 8,
            "description": "Password must be at least 8 characters",
        },
        "fullname": {
            "bsonType": "string",
            "minLength": 2,
            "maxLength": 100,
            "description": "Full name must be between 2-100 characters",
        },
        "role": {
            "bsonType": "string",
            "enum": USER_ROLES,
            "description": "Role must be either admin or user",
        },
        "isVerified": _bool("isVerified"),
        "displayName": {
            "bsonType": "string",
            "maxLength": 50,
            "description": "Display name must be max 50 characters",
        },
        "isAnonymous": _bool("isAnonymous"),
        "isMentor": _bool("isMentor"),
        "isMentee": _bool("isMentee"),
        "mentorshipTopics": {
            "bsonType": "array",
            "items": {"bsonType": "string"},
            "description": "mentorshipTopics must be an array of strings",
        },
        "availableForMentoring": _bool("availableForMentoring"),
    },
}

mentorship_requests_schema = {
    "bsonType": "object",
    "required": ["menteeId", "mentorId", "status", "topics", "createdAt", "updatedAt"],
    "properties": {
        "menteeId": _object_id("menteeId"),
        "mentorId": _object_id("mentorId"),
        "status": {
            "bsonType": "string",
            "enum": REQUEST_STATUSES,
            "description": "status must be one of: " + ", ".join(REQUEST_STATUSES),
        },
        "topics": _topics(),
        "message": {
            "bsonType": "string",
            "maxLength": 500,
            "description": "message must be max 500 characters",
        },
    },
}

mentorship_connections_schema = {
    "bsonType": "object",
    "required": [
        "menteeId", "mentorId", "requestId", "status",
        "topics", "startedAt", "createdAt", "updatedAt",
    ],
    "properties": {
        "menteeId": _object_id("menteeId"),
        "mentorId": _object_id("mentorId"),
        "requestId": _object_id("requestId"),
        "status": {
            "bsonType": "string",
            "enum": CONNECTION_STATUSES,
            "description": "status must be one of: " + ", ".join(CONNECTION_STATUSES),
        },
        "topics": _topics(),
        "menteeRating": _rating("menteeRating"),
        "mentorRating": _rating("mentorRating"),
    },
}
