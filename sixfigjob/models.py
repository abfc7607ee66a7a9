"""Pydantic models for user profiles and newsletter records."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class UserProfile(BaseModel):
    """A registered user's profile row."""

    id: int = Field(description="Numeric profile identifier")
    auth_user_id: str = Field(description="Identifier assigned by the auth provider")
    email: str = Field(description="Primary email address")
    first_name: Optional[str] = Field(default=None, description="Given name")
    last_name: Optional[str] = Field(default=None, description="Family name")
    preferences: Dict[str, Any] = Field(
        default_factory=dict, description="Free-form user preferences"
    )
    created_at: Optional[str] = Field(default=None, description="Creation timestamp")

    @field_validator("preferences", mode="before")
    @classmethod
    def _null_preferences(cls, value: Any) -> Any:
        # Nullable column in the profiles table
        return {} if value is None else value


class NewsletterJob(BaseModel):
    """Job listing as it appears in the weekly newsletter."""

    JobID: str
    JobTitle: str
    Company: str
    Location: str
    formatted_salary: str = ""
    ShortDescription: str = ""
    PostedDate: str = ""
    is_remote: bool = False
    slug: str


class NewsletterStats(BaseModel):
    """Headline numbers for a newsletter issue."""

    totalJobs: int = Field(description="Jobs currently listed")
    newJobs: int = Field(description="Jobs posted since the last issue")
    avgSalary: Optional[str] = Field(default=None, description="Formatted average salary")


class ScheduleStatus(BaseModel):
    """Where the weekly auto-send schedule currently stands."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    current_time: datetime
    is_monday: bool
    next_scheduled_send: datetime
    auto_send_enabled: bool
