"""MongoDB Beanie model for Contact inquiry documents."""

from datetime import datetime
from typing import List, Optional

import pymongo
from beanie import Document
from pydantic import BaseModel, Field

from amrutam.core.utils.datetime_utils import utc_now


class ContactResponseMongo(BaseModel):
    message: str
    responded_by: str
    responded_at: datetime = Field(default_factory=utc_now)


class InternalNoteMongo(BaseModel):
    note: str
    added_by: str
    added_at: datetime = Field(default_factory=utc_now)


class ContactMongo(Document):
    """MongoDB model for Contact entity."""

    name: str
    email: str
    phone: str
    subject: Optional[str] = None
    message: str
    inquiry_type: str = Field(default="general")
    priority: str = Field(default="medium")
    status: str = Field(default="new")
    assigned_to: Optional[str] = None
    assigned_at: Optional[datetime] = None
    response: Optional[ContactResponseMongo] = None
    follow_up_required: bool = Field(default=False)
    follow_up_date: Optional[datetime] = None
    follow_up_notes: Optional[str] = None
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None
    referrer_page: Optional[str] = None
    attachments: List[dict] = Field(default_factory=list)
    internal_notes: List[InternalNoteMongo] = Field(default_factory=list)
    resolution_summary: Optional[str] = None
    resolved_at: Optional[datetime] = None
    resolution_time: Optional[float] = None
    satisfaction_rating: Optional[int] = None
    satisfaction_feedback: Optional[str] = None
    source: str = Field(default="website")
    is_spam: bool = Field(default=False)
    moderation_notes: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    class Settings:
        name = "contacts"
        indexes = [
            "email",
            [("status", pymongo.ASCENDING), ("created_at", pymongo.DESCENDING)],
            [("priority", pymongo.ASCENDING), ("status", pymongo.ASCENDING)],
            "inquiry_type",
            "assigned_to",
        ]
