"""Contact inquiry domain entity with SLA tracking."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from ...core.utils.datetime_utils import hours_between, utc_now
from ..enums.contact import (
    CLOSED_INQUIRY_STATUSES,
    DEFAULT_SLA_HOURS,
    HIGH_PRIORITY_TYPES,
    LOW_PRIORITY_TYPES,
    SLA_HOURS,
    InquiryPriority,
    InquiryStatus,
)
from ..errors import InvalidEntityDataError


@dataclass
class ContactResponse:
    message: str
    responded_by: str
    responded_at: datetime = field(default_factory=utc_now)


@dataclass
class InternalNote:
    note: str
    added_by: str
    added_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if len(self.note) > 500:
            raise InvalidEntityDataError("note", "cannot exceed 500 characters")


@dataclass
class Contact:
    name: str
    email: str
    phone: str
    message: str
    id: Optional[str] = None
    subject: Optional[str] = None
    inquiry_type: str = "general"
    priority: str = InquiryPriority.MEDIUM.value
    status: str = InquiryStatus.NEW.value
    assigned_to: Optional[str] = None
    assigned_at: Optional[datetime] = None
    response: Optional[ContactResponse] = None
    follow_up_required: bool = False
    follow_up_date: Optional[datetime] = None
    follow_up_notes: Optional[str] = None
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None
    referrer_page: Optional[str] = None
    attachments: List[dict] = field(default_factory=list)
    internal_notes: List[InternalNote] = field(default_factory=list)
    resolution_summary: Optional[str] = None
    resolved_at: Optional[datetime] = None
    resolution_time: Optional[float] = None
    satisfaction_rating: Optional[int] = None
    satisfaction_feedback: Optional[str] = None
    source: str = "website"
    is_spam: bool = False
    moderation_notes: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        self.email = (self.email or "").strip().lower()
        if not self.name or not self.name.strip():
            raise InvalidEntityDataError("name", "must not be empty")
        if not self.message or not self.message.strip():
            raise InvalidEntityDataError("message", "must not be empty")
        if len(self.message) > 2000:
            raise InvalidEntityDataError("message", "cannot exceed 2000 characters")

    @staticmethod
    def priority_for(inquiry_type: str) -> str:
        """Initial priority implied by the kind of inquiry."""
        if inquiry_type in HIGH_PRIORITY_TYPES:
            return InquiryPriority.HIGH.value
        if inquiry_type in LOW_PRIORITY_TYPES:
            return InquiryPriority.LOW.value
        return InquiryPriority.MEDIUM.value

    @property
    def response_time(self) -> Optional[float]:
        """Hours from submission to first response, two decimals."""
        if self.response and self.response.responded_at:
            return round(hours_between(self.created_at, self.response.responded_at), 2)
        return None

    def sla_hours(self) -> int:
        return SLA_HOURS.get(self.priority, DEFAULT_SLA_HOURS)

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        if self.status in CLOSED_INQUIRY_STATUSES:
            return False
        return hours_between(self.created_at, now or utc_now()) > self.sla_hours()

    def set_status(self, status: str, now: Optional[datetime] = None) -> None:
        now = now or utc_now()
        self.status = status
        if status == InquiryStatus.RESOLVED and not self.resolved_at:
            self.resolved_at = now
            self.resolution_time = hours_between(self.created_at, now)
        self.updated_at = now

    def assign(self, assignee: str, now: Optional[datetime] = None) -> None:
        if assignee == self.assigned_to and self.assigned_at:
            return
        self.assigned_to = assignee
        self.assigned_at = now or utc_now()

    def add_internal_note(self, note: str, added_by: str) -> InternalNote:
        entry = InternalNote(note=note, added_by=added_by)
        self.internal_notes.append(entry)
        self.updated_at = entry.added_at
        return entry

    def respond(self, message: str, responded_by: str) -> ContactResponse:
        self.response = ContactResponse(message=message, responded_by=responded_by)
        if self.status in (InquiryStatus.NEW, InquiryStatus.ASSIGNED):
            self.status = InquiryStatus.IN_PROGRESS.value
        self.updated_at = self.response.responded_at
        return self.response

    def resolve(self, resolution_summary: str, now: Optional[datetime] = None) -> None:
        self.resolution_summary = resolution_summary
        self.set_status(InquiryStatus.RESOLVED.value, now)
