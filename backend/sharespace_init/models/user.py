"""
User model for the users collection.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from sharespace_init.database.validators import EMAIL_PATTERN
from sharespace_init.models.base import Document


class UserRole(str, Enum):
    """User role levels."""
    ADMIN = "admin"
    USER = "user"


class PrivacySettings(BaseModel):
    """What other users can see; everything hidden by default."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    show_real_name: bool = False
    show_profile_picture: bool = False
    show_contact_info: bool = False


class User(Document):
    """
    User document model for the sharespace.users collection.
    """
    username: str = Field(..., min_length=3, max_length=30, description="Unique username")
    email: str = Field(..., pattern=EMAIL_PATTERN, description="Unique email address")
    password: str = Field(..., min_length=8, description="Password hash, never plain text")
    fullname: str = Field(..., min_length=2, max_length=100)
    role: UserRole = Field(default=UserRole.USER)
    is_verified: bool = Field(default=False)

    bio: Optional[str] = None
    profile_picture: Optional[str] = None
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Anonymous identity
    display_name: Optional[str] = Field(None, max_length=50, description="Unique when set")
    is_anonymous: bool = False

    # Mentorship profile
    is_mentor: bool = False
    is_mentee: bool = False
    mentorship_topics: Optional[list[str]] = None
    mentorship_bio: Optional[str] = None
    available_for_mentoring: bool = False

    privacy_settings: PrivacySettings = Field(default_factory=PrivacySettings)
