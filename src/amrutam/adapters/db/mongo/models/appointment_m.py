"""MongoDB Beanie model for Appointment documents."""

from datetime import datetime
from typing import Any, Dict, List, Optional

import pymongo
from beanie import Document, PydanticObjectId
from pydantic import BaseModel, Field

from amrutam.core.utils.datetime_utils import utc_now


class PatientFeedbackMongo(BaseModel):
    rating: Optional[int] = None
    comment: Optional[str] = None
    submitted_at: Optional[datetime] = None


class AppointmentMongo(Document):
    """MongoDB model for Appointment entity.

    ``appointment_date`` is stored as midnight of the booked day.
    """

    doctor_id: PydanticObjectId = Field(..., description="Doctor reference")
    patient_name: str
    patient_email: str
    patient_phone: str
    patient_age: Optional[int] = None
    appointment_date: datetime
    appointment_time: str
    duration: int = Field(default=30)
    appointment_type: str = Field(default="consultation")
    consultation_mode: str
    reason_for_visit: Optional[str] = None
    symptoms: List[str] = Field(default_factory=list)
    urgency_level: str = Field(default="medium")
    status: str = Field(default="scheduled")
    confirmation_status: str = Field(default="pending")
    booked_at: datetime = Field(default_factory=utc_now)
    booked_by: str = Field(default="patient")
    consultation_fee: float = Field(default=0)
    payment_status: str = Field(default="pending")
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    reminders_sent: List[Dict[str, Any]] = Field(default_factory=list)
    original_appointment_date: Optional[datetime] = None
    rescheduled_by: Optional[str] = None
    rescheduling_reason: Optional[str] = None
    rescheduling_count: int = Field(default=0)
    cancellation_reason: Optional[str] = None
    cancelled_by: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    meeting_link: Optional[str] = None
    meeting_id: Optional[str] = None
    special_instructions: Optional[str] = None
    doctor_notes: Optional[str] = None
    is_follow_up: bool = Field(default=False)
    parent_consultation_id: Optional[PydanticObjectId] = None
    patient_feedback: Optional[PatientFeedbackMongo] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    class Settings:
        name = "appointments"
        indexes = [
            [
                ("doctor_id", pymongo.ASCENDING),
                ("appointment_date", pymongo.ASCENDING),
                ("appointment_time", pymongo.ASCENDING),
            ],
            [("patient_email", pymongo.ASCENDING), ("appointment_date", pymongo.DESCENDING)],
            [("status", pymongo.ASCENDING), ("appointment_date", pymongo.ASCENDING)],
            "booked_at",
        ]
