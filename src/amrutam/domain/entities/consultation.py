"""Consultation domain entity: a clinical session with Ayurvedic assessment."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ...core.utils.datetime_utils import utc_now
from ..enums.scheduling import ConsultationStatus
from ..errors import InvalidEntityDataError


@dataclass
class Medication:
    name: str
    dosage: Optional[str] = None
    frequency: Optional[str] = None


@dataclass
class Prescription:
    medicine_name: str
    dosage: str
    frequency: str
    duration: str
    instructions: str = "Take as prescribed"


@dataclass
class Attachment:
    file_name: Optional[str] = None
    file_url: Optional[str] = None
    file_type: Optional[str] = None
    uploaded_at: datetime = field(default_factory=utc_now)


@dataclass
class Consultation:
    doctor_id: str
    patient_name: str
    patient_email: str
    patient_phone: str
    patient_age: int
    patient_gender: str
    consultation_type: str
    consultation_date: datetime
    id: Optional[str] = None
    duration: int = 30
    chief_complaint: Optional[str] = None
    symptoms: List[str] = field(default_factory=list)
    medical_history: Optional[str] = None
    current_medications: List[Medication] = field(default_factory=list)
    allergies: List[str] = field(default_factory=list)
    prakriti: Optional[str] = None
    vikriti: Optional[str] = None
    pulse: Optional[str] = None
    tongue: Optional[str] = None
    diagnosis: Optional[str] = None
    treatment: Optional[str] = None
    prescriptions: List[Prescription] = field(default_factory=list)
    dietary_advice: Optional[str] = None
    lifestyle_recommendations: Optional[str] = None
    follow_up_required: bool = False
    follow_up_date: Optional[datetime] = None
    follow_up_instructions: Optional[str] = None
    status: str = ConsultationStatus.SCHEDULED.value
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    consultation_fee: float = 0
    payment_status: str = "pending"
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    doctor_rating: Optional[int] = None
    doctor_feedback: Optional[str] = None
    patient_satisfaction: Optional[int] = None
    meeting_id: Optional[str] = None
    recording_url: Optional[str] = None
    notes: Optional[str] = None
    attachments: List[Attachment] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        self.patient_email = (self.patient_email or "").strip().lower()
        if not self.patient_name or not self.patient_name.strip():
            raise InvalidEntityDataError("patient_name", "must not be empty")
        if not 0 <= self.patient_age <= 120:
            raise InvalidEntityDataError("patient_age", "must be between 0 and 120")
        for name in ("doctor_rating", "patient_satisfaction"):
            value = getattr(self, name)
            if value is not None and not 1 <= value <= 5:
                raise InvalidEntityDataError(name, "must be between 1 and 5")

    @property
    def actual_duration(self) -> Optional[int]:
        """Minutes between start and end, rounded; None until both are known."""
        if self.start_time and self.end_time:
            return round((self.end_time - self.start_time).total_seconds() / 60)
        return None

    def transition_to(self, status: str, now: Optional[datetime] = None) -> bool:
        """Move to ``status`` and stamp start/end times.

        Returns True when this call completed the consultation.
        """
        now = now or utc_now()
        was_completed = self.status == ConsultationStatus.COMPLETED
        self.status = status
        if status == ConsultationStatus.IN_PROGRESS and not self.start_time:
            self.start_time = now
        elif status == ConsultationStatus.COMPLETED and not self.end_time:
            self.end_time = now
        self.updated_at = now
        return status == ConsultationStatus.COMPLETED and not was_completed

    def record_treatment(
        self,
        prescriptions: Optional[List[Prescription]] = None,
        diagnosis: Optional[str] = None,
        treatment: Optional[str] = None,
        dietary_advice: Optional[str] = None,
        lifestyle_recommendations: Optional[str] = None,
    ) -> None:
        """Store the treatment plan; a new prescription list replaces the old one."""
        if prescriptions:
            self.prescriptions = list(prescriptions)
        if diagnosis:
            self.diagnosis = diagnosis
        if treatment:
            self.treatment = treatment
        if dietary_advice:
            self.dietary_advice = dietary_advice
        if lifestyle_recommendations:
            self.lifestyle_recommendations = lifestyle_recommendations
        self.updated_at = utc_now()

    def record_assessment(
        self,
        prakriti: Optional[str] = None,
        vikriti: Optional[str] = None,
        pulse: Optional[str] = None,
        tongue: Optional[str] = None,
    ) -> None:
        """Store the Ayurvedic assessment; omitted values keep their previous state."""
        if prakriti:
            self.prakriti = prakriti
        if vikriti:
            self.vikriti = vikriti
        if pulse:
            self.pulse = pulse
        if tongue:
            self.tongue = tongue
        self.updated_at = utc_now()

    def summary(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "patient_name": self.patient_name,
            "consultation_date": self.consultation_date,
            "consultation_type": self.consultation_type,
            "status": self.status,
            "duration": self.actual_duration or self.duration,
            "diagnosis": self.diagnosis,
            "payment_status": self.payment_status,
        }
