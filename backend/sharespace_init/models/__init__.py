"""
Document models for the ShareSpace collections.
"""
from sharespace_init.models.user import User, UserRole, PrivacySettings
from sharespace_init.models.mentorship import (
    MentorshipRequest,
    MentorshipRequestStatus,
    MentorshipConnection,
    MentorshipConnectionStatus,
)

__all__ = [
    "User",
    "UserRole",
    "PrivacySettings",
    "MentorshipRequest",
    "MentorshipRequestStatus",
    "MentorshipConnection",
    "MentorshipConnectionStatus",
]
