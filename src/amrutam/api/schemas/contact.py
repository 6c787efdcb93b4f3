"""
Contact inquiry API schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from ...core.utils.string_utils import PHONE_PATTERN
from ...domain.enums.contact import InquirySource, InquiryType
from .common import CamelModel, Pagination


class SubmitContactSchema(CamelModel):
    # Required fields are checked in the handler so the message names all of them
    name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN.pattern)
    message: Optional[str] = Field(None, max_length=2000)
    subject: Optional[str] = Field(None, max_length=200)
    inquiry_type: InquiryType = InquiryType.GENERAL
    source: InquirySource = InquirySource.WEBSITE


class UpdateContactStatusSchema(CamelModel):
    status: Optional[str] = None
    assigned_to: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=500)


class RespondContactSchema(CamelModel):
    message: Optional[str] = Field(None, max_length=2000)
    responded_by: str = "Support Team"


class ResolveContactSchema(CamelModel):
    resolution_summary: Optional[str] = Field(None, max_length=500)


class ContactResponseSchema(CamelModel):
    message: str
    responded_by: str
    responded_at: datetime


class InternalNoteSchema(CamelModel):
    note: str
    added_by: str
    added_at: datetime


class ContactSchema(CamelModel):
    """Inquiry as listed for support staff; internal and moderation notes omitted."""

    id: str
    name: str
    email: str
    phone: str
    subject: Optional[str] = None
    message: str
    inquiry_type: str
    priority: str
    status: str
    assigned_to: Optional[str] = None
    assigned_at: Optional[datetime] = None
    response: Optional[ContactResponseSchema] = None
    response_time: Optional[float] = None
    follow_up_required: bool
    follow_up_date: Optional[datetime] = None
    source: str
    resolution_summary: Optional[str] = None
    resolved_at: Optional[datetime] = None
    resolution_time: Optional[float] = None
    satisfaction_rating: Optional[int] = None
    overdue: bool = False
    created_at: datetime
    updated_at: datetime


class ContactDetailSchema(ContactSchema):
    internal_notes: List[InternalNoteSchema]
    moderation_notes: Optional[str] = None
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None
    referrer_page: Optional[str] = None


class ContactSubmissionData(CamelModel):
    inquiry_id: str
    name: str
    email: str
    inquiry_type: str
    priority: str
    estimated_response_time: str
    auto_response: str


class ContactData(CamelModel):
    contact: ContactDetailSchema


class ContactListData(CamelModel):
    contacts: List[ContactSchema]
    pagination: Pagination


class PendingContactSchema(CamelModel):
    id: str
    name: str
    email: str
    subject: Optional[str] = None
    inquiry_type: str
    priority: str
    status: str
    overdue: bool = False
    created_at: datetime


class PendingContactsData(CamelModel):
    pending_inquiries: List[PendingContactSchema]
    count: int


class ContactStatsSchema(CamelModel):
    total_inquiries: int
    new_inquiries: int
    in_progress_inquiries: int
    resolved_inquiries: int
    high_priority_inquiries: int
    average_resolution_time: Optional[float] = None
    inquiry_types: List[str]
    pending_inquiries: int
    resolution_rate: float


class ContactStatsData(CamelModel):
    summary: ContactStatsSchema


def contact_view(schema_cls, contact):
    """Build a contact schema, adding the SLA flag computed at read time."""
    return schema_cls.model_validate(contact).model_copy(update={"overdue": contact.is_overdue()})
