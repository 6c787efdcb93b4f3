"""Appointment DTOs for use case communication."""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from ...domain.entities.doctor import TimeSlot


@dataclass
class BookAppointmentRequest:
    """Request DTO for booking an appointment."""

    doctor_id: str
    patient_name: str
    patient_email: str
    patient_phone: str
    appointment_date: date
    appointment_time: str
    consultation_mode: str
    patient_age: Optional[int] = None
    duration: int = 30
    appointment_type: str = "consultation"
    reason_for_visit: Optional[str] = None
    symptoms: List[str] = field(default_factory=list)
    urgency_level: str = "medium"
    booked_by: str = "patient"
    special_instructions: Optional[str] = None
    is_follow_up: bool = False
    parent_consultation_id: Optional[str] = None


@dataclass
class RescheduleAppointmentRequest:
    new_date: date
    new_time: str
    reason: Optional[str] = None
    rescheduled_by: Optional[str] = None


@dataclass
class SlotAvailability:
    """Open and taken slots for a doctor on one day."""

    date: date
    day_name: str
    available_slots: List[TimeSlot]
    total_slots: int
    booked_slots: int
