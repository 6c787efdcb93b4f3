"""
Support inquiry enums and SLA windows.
"""

from enum import Enum


class InquiryType(str, Enum):
    GENERAL = "general"
    TECHNICAL_SUPPORT = "technical-support"
    DOCTOR_REGISTRATION = "doctor-registration"
    PATIENT_INQUIRY = "patient-inquiry"
    BILLING = "billing"
    PARTNERSHIP = "partnership"
    COMPLAINT = "complaint"
    FEEDBACK = "feedback"
    OTHER = "other"


class InquiryPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class InquiryStatus(str, Enum):
    NEW = "new"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    CLOSED = "closed"
    ESCALATED = "escalated"


class InquirySource(str, Enum):
    WEBSITE = "website"
    MOBILE_APP = "mobile-app"
    EMAIL = "email"
    PHONE = "phone"
    SOCIAL_MEDIA = "social-media"
    OTHER = "other"


# Hours before an open inquiry counts as overdue
SLA_HOURS = {
    InquiryPriority.URGENT: 2,
    InquiryPriority.HIGH: 8,
    InquiryPriority.MEDIUM: 24,
    InquiryPriority.LOW: 72,
}
DEFAULT_SLA_HOURS = 24

# Highest first
PRIORITY_RANK = {
    InquiryPriority.URGENT: 0,
    InquiryPriority.HIGH: 1,
    InquiryPriority.MEDIUM: 2,
    InquiryPriority.LOW: 3,
}

OPEN_INQUIRY_STATUSES = (
    InquiryStatus.NEW,
    InquiryStatus.ASSIGNED,
    InquiryStatus.IN_PROGRESS,
)
CLOSED_INQUIRY_STATUSES = (InquiryStatus.RESOLVED, InquiryStatus.CLOSED)

HIGH_PRIORITY_TYPES = (
    InquiryType.TECHNICAL_SUPPORT,
    InquiryType.COMPLAINT,
    InquiryType.BILLING,
)
LOW_PRIORITY_TYPES = (InquiryType.FEEDBACK,)
