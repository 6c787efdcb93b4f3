"""
Appointment-related API schemas.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from ...application.dto.appointment_dto import BookAppointmentRequest, RescheduleAppointmentRequest
from ...core.utils.string_utils import HHMM_PATTERN, PHONE_PATTERN
from ...domain.enums.scheduling import (
    AppointmentStatus,
    AppointmentType,
    BookedBy,
    ConsultationMode,
    UrgencyLevel,
)
from .common import CamelModel, Pagination
from .doctor import TimeSlotSchema

CalendarDate = date


class BookAppointmentSchema(CamelModel):
    doctor_id: str = Field(..., min_length=1)
    patient_name: str = Field(..., min_length=1, max_length=100)
    patient_email: EmailStr
    patient_phone: str = Field(..., pattern=PHONE_PATTERN.pattern)
    patient_age: Optional[int] = Field(None, ge=0, le=120)
    appointment_date: date
    appointment_time: str = Field(..., pattern=HHMM_PATTERN.pattern)
    duration: int = Field(30, ge=15, le=120)
    appointment_type: AppointmentType = AppointmentType.CONSULTATION
    consultation_mode: ConsultationMode
    reason_for_visit: Optional[str] = Field(None, max_length=500)
    symptoms: List[str] = Field(default_factory=list)
    urgency_level: UrgencyLevel = UrgencyLevel.MEDIUM
    booked_by: BookedBy = BookedBy.PATIENT
    special_instructions: Optional[str] = Field(None, max_length=300)
    is_follow_up: bool = False
    parent_consultation_id: Optional[str] = None

    def to_domain(self) -> BookAppointmentRequest:
        return BookAppointmentRequest(
            doctor_id=self.doctor_id,
            patient_name=self.patient_name,
            patient_email=str(self.patient_email),
            patient_phone=self.patient_phone,
            patient_age=self.patient_age,
            appointment_date=self.appointment_date,
            appointment_time=self.appointment_time,
            duration=self.duration,
            appointment_type=self.appointment_type,
            consultation_mode=self.consultation_mode,
            reason_for_visit=self.reason_for_visit,
            symptoms=list(self.symptoms),
            urgency_level=self.urgency_level,
            booked_by=self.booked_by,
            special_instructions=self.special_instructions,
            is_follow_up=self.is_follow_up,
            parent_consultation_id=self.parent_consultation_id,
        )


class UpdateAppointmentStatusSchema(CamelModel):
    # Plain string so an unknown value reaches the "Invalid status" check
    status: str = Field(..., min_length=1)
    notes: Optional[str] = Field(None, max_length=500)


class RescheduleAppointmentSchema(CamelModel):
    new_date: date
    new_time: str = Field(..., pattern=HHMM_PATTERN.pattern)
    reason: Optional[str] = Field(None, max_length=200)
    rescheduled_by: Optional[BookedBy] = None

    def to_domain(self) -> RescheduleAppointmentRequest:
        return RescheduleAppointmentRequest(
            new_date=self.new_date,
            new_time=self.new_time,
            reason=self.reason,
            rescheduled_by=self.rescheduled_by,
        )


class CancelAppointmentSchema(CamelModel):
    reason: Optional[str] = Field(None, max_length=200)
    cancelled_by: Optional[BookedBy] = None


class PatientFeedbackSchema(CamelModel):
    rating: Optional[int] = None
    comment: Optional[str] = None
    submitted_at: Optional[datetime] = None


class AppointmentSchema(CamelModel):
    id: str
    doctor_id: str
    patient_name: str
    patient_email: str
    patient_phone: str
    patient_age: Optional[int] = None
    appointment_date: date
    appointment_time: str
    appointment_datetime: datetime
    appointment_end_time: datetime
    duration: int
    appointment_type: str
    consultation_mode: str
    reason_for_visit: Optional[str] = None
    symptoms: List[str]
    urgency_level: str
    status: str
    confirmation_status: str
    booked_at: datetime
    booked_by: str
    consultation_fee: float
    payment_status: str
    transaction_id: Optional[str] = None
    original_appointment_date: Optional[date] = None
    rescheduled_by: Optional[str] = None
    rescheduling_reason: Optional[str] = None
    rescheduling_count: int
    cancellation_reason: Optional[str] = None
    cancelled_by: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    meeting_link: Optional[str] = None
    meeting_id: Optional[str] = None
    special_instructions: Optional[str] = None
    doctor_notes: Optional[str] = None
    is_follow_up: bool
    parent_consultation_id: Optional[str] = None
    patient_feedback: Optional[PatientFeedbackSchema] = None
    created_at: datetime
    updated_at: datetime


class AppointmentData(CamelModel):
    appointment: AppointmentSchema


class AppointmentListData(CamelModel):
    appointments: List[AppointmentSchema]
    pagination: Pagination


class SlotAvailabilitySchema(CamelModel):
    date: CalendarDate
    day_name: str
    available_slots: List[TimeSlotSchema]
    total_slots: int
    booked_slots: int
