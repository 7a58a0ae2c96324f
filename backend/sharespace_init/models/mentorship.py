"""
Mentorship request and connection models.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from bson import ObjectId
from pydantic import Field

from sharespace_init.models.base import Document


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MentorshipRequestStatus(str, Enum):
    """Request lifecycle; transitions are owned by the application."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    CANCELED = "canceled"


class MentorshipConnectionStatus(str, Enum):
    """Connection lifecycle; completed and ended are terminal."""
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    ENDED = "ended"


class MentorshipRequest(Document):
    """Request from a mentee to a mentor."""
    mentee_id: ObjectId
    mentor_id: ObjectId
    status: MentorshipRequestStatus = MentorshipRequestStatus.PENDING
    message: Optional[str] = Field(None, max_length=500)
    topics: list[str] = Field(..., min_length=1)
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)
    # Stored field name kept as the application writes it
    responded_at: Optional[datetime] = Field(None, alias="responsedAt")


class MentorshipConnection(Document):
    """Mentorship relationship created from exactly one accepted request."""
    mentee_id: ObjectId
    mentor_id: ObjectId
    request_id: ObjectId
    status: MentorshipConnectionStatus = MentorshipConnectionStatus.ACTIVE
    topics: list[str] = Field(..., min_length=1)
    started_at: datetime = Field(default_factory=_now)
    last_interaction: Optional[datetime] = None
    ended_at: Optional[datetime] = None
    end_reason: Optional[str] = None
    mentee_rating: Optional[int] = Field(None, ge=1, le=5)
    mentor_rating: Optional[int] = Field(None, ge=1, le=5)
    mentee_feedback: Optional[str] = Field(None, max_length=1000)
    mentor_feedback: Optional[str] = Field(None, max_length=1000)
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)
