"""Appointment domain entity: a booked slot with a doctor."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

from ...core.utils.datetime_utils import combine_date_time, utc_now
from ...core.utils.string_utils import validate_hhmm
from ..enums.scheduling import ACTIVE_APPOINTMENT_STATUSES, AppointmentStatus
from ..errors import InvalidEntityDataError


@dataclass
class PatientFeedback:
    rating: Optional[int] = None
    comment: Optional[str] = None
    submitted_at: Optional[datetime] = None


@dataclass
class Appointment:
    """Appointment domain entity.

    ``appointment_date`` is a calendar date and ``appointment_time`` an
    'HH:MM' string; together with ``duration`` they determine the slot.
    """

    doctor_id: str
    patient_name: str
    patient_email: str
    patient_phone: str
    appointment_date: date
    appointment_time: str
    consultation_mode: str
    id: Optional[str] = None
    patient_age: Optional[int] = None
    duration: int = 30
    appointment_type: str = "consultation"
    reason_for_visit: Optional[str] = None
    symptoms: List[str] = field(default_factory=list)
    urgency_level: str = "medium"
    status: str = AppointmentStatus.SCHEDULED.value
    confirmation_status: str = "pending"
    booked_at: datetime = field(default_factory=utc_now)
    booked_by: str = "patient"
    consultation_fee: float = 0
    payment_status: str = "pending"
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    reminders_sent: List[Dict[str, Any]] = field(default_factory=list)
    original_appointment_date: Optional[date] = None
    rescheduled_by: Optional[str] = None
    rescheduling_reason: Optional[str] = None
    rescheduling_count: int = 0
    cancellation_reason: Optional[str] = None
    cancelled_by: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    meeting_link: Optional[str] = None
    meeting_id: Optional[str] = None
    special_instructions: Optional[str] = None
    doctor_notes: Optional[str] = None
    is_follow_up: bool = False
    parent_consultation_id: Optional[str] = None
    patient_feedback: Optional[PatientFeedback] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        self.patient_email = (self.patient_email or "").strip().lower()
        if not self.patient_name or not self.patient_name.strip():
            raise InvalidEntityDataError("patient_name", "must not be empty")
        if not validate_hhmm(self.appointment_time):
            raise InvalidEntityDataError("appointment_time", "must be in HH:MM format")
        if not 15 <= self.duration <= 120:
            raise InvalidEntityDataError("duration", "must be between 15 and 120 minutes")
        if self.patient_age is not None and not 0 <= self.patient_age <= 120:
            raise InvalidEntityDataError("patient_age", "must be between 0 and 120")

    @property
    def appointment_datetime(self) -> datetime:
        return combine_date_time(self.appointment_date, self.appointment_time)

    @property
    def appointment_end_time(self) -> datetime:
        return self.appointment_datetime + timedelta(minutes=self.duration)

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_APPOINTMENT_STATUSES

    def hours_until_start(self, now: Optional[datetime] = None) -> float:
        now = now or utc_now()
        return (self.appointment_datetime - now).total_seconds() / 3600

    def can_be_cancelled(self, now: Optional[datetime] = None, window_hours: int = 2) -> bool:
        return self.is_active and self.hours_until_start(now) > window_hours

    def can_be_rescheduled(
        self,
        now: Optional[datetime] = None,
        window_hours: int = 4,
        max_reschedules: int = 2,
    ) -> bool:
        return (
            self.is_active
            and self.hours_until_start(now) > window_hours
            and self.rescheduling_count < max_reschedules
        )

    def cancel(self, reason: Optional[str], cancelled_by: Optional[str], now: Optional[datetime] = None) -> None:
        self.status = AppointmentStatus.CANCELLED.value
        self.cancellation_reason = reason
        self.cancelled_by = cancelled_by
        self.cancelled_at = now or utc_now()
        self.updated_at = self.cancelled_at

    def reschedule(
        self,
        new_date: date,
        new_time: str,
        reason: Optional[str],
        rescheduled_by: Optional[str],
    ) -> None:
        if not validate_hhmm(new_time):
            raise InvalidEntityDataError("appointment_time", "must be in HH:MM format")
        # Keep the very first booked date across several reschedules
        if self.original_appointment_date is None:
            self.original_appointment_date = self.appointment_date
        self.appointment_date = new_date
        self.appointment_time = new_time
        self.rescheduling_reason = reason
        self.rescheduled_by = rescheduled_by
        self.rescheduling_count += 1
        self.status = AppointmentStatus.RESCHEDULED.value
        self.updated_at = utc_now()

    def update_status(self, status: str, notes: Optional[str] = None) -> None:
        self.status = status
        if notes:
            self.doctor_notes = notes
        if status == AppointmentStatus.CANCELLED and self.cancelled_at is None:
            self.cancelled_at = utc_now()
        self.updated_at = utc_now()

    def assign_meeting_room(self, base_url: str) -> None:
        """Derive the meeting id and link from the persisted id."""
        if not self.id:
            raise InvalidEntityDataError("id", "meeting rooms need a saved appointment")
        self.meeting_id = f"amrutam-{self.id[-8:]}"
        self.meeting_link = f"{base_url.rstrip('/')}/{self.meeting_id}"

    def summary(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "patient_name": self.patient_name,
            "appointment_date_time": self.appointment_datetime,
            "duration": self.duration,
            "consultation_mode": self.consultation_mode,
            "status": self.status,
            "urgency_level": self.urgency_level,
            "payment_status": self.payment_status,
        }
