"""
Consultation-related API schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from ...application.dto.consultation_dto import ConsultationUpdate, CreateConsultationRequest
from ...core.utils.datetime_utils import to_naive_utc
from ...core.utils.string_utils import PHONE_PATTERN
from ...domain.entities.consultation import Medication, Prescription
from ...domain.enums.scheduling import ConsultationStatus, ConsultationType, Dosha, Gender
from .common import CamelModel, Pagination


class MedicationSchema(CamelModel):
    name: str
    dosage: Optional[str] = None
    frequency: Optional[str] = None


class PrescriptionSchema(CamelModel):
    medicine_name: str = Field(..., min_length=1)
    dosage: str = Field(..., min_length=1)
    frequency: str = Field(..., min_length=1)
    duration: str = Field(..., min_length=1)
    instructions: str = "Take as prescribed"

    def to_domain(self) -> Prescription:
        return Prescription(**self.model_dump())


class AttachmentSchema(CamelModel):
    file_name: Optional[str] = None
    file_url: Optional[str] = None
    file_type: Optional[str] = None
    uploaded_at: datetime


class CreateConsultationSchema(CamelModel):
    doctor_id: str = Field(..., min_length=1)
    patient_name: str = Field(..., min_length=1, max_length=100)
    patient_email: EmailStr
    patient_phone: str = Field(..., pattern=PHONE_PATTERN.pattern)
    patient_age: int = Field(..., ge=0, le=120)
    patient_gender: Gender
    consultation_type: ConsultationType
    consultation_date: datetime
    duration: int = Field(30, ge=15, le=120)
    chief_complaint: Optional[str] = Field(None, max_length=1000)
    symptoms: List[str] = Field(default_factory=list)
    medical_history: Optional[str] = Field(None, max_length=2000)
    current_medications: List[MedicationSchema] = Field(default_factory=list)
    allergies: List[str] = Field(default_factory=list)

    def to_domain(self) -> CreateConsultationRequest:
        return CreateConsultationRequest(
            doctor_id=self.doctor_id,
            patient_name=self.patient_name,
            patient_email=str(self.patient_email),
            patient_phone=self.patient_phone,
            patient_age=self.patient_age,
            patient_gender=self.patient_gender,
            consultation_type=self.consultation_type,
            consultation_date=to_naive_utc(self.consultation_date),
            duration=self.duration,
            chief_complaint=self.chief_complaint,
            symptoms=list(self.symptoms),
            medical_history=self.medical_history,
            current_medications=[Medication(**m.model_dump()) for m in self.current_medications],
            allergies=list(self.allergies),
        )


class UpdateConsultationSchema(CamelModel):
    """Editable consultation fields; ``status`` also stamps start and end times."""

    status: Optional[ConsultationStatus] = None
    consultation_date: Optional[datetime] = None
    duration: Optional[int] = Field(None, ge=15, le=120)
    chief_complaint: Optional[str] = Field(None, max_length=1000)
    symptoms: Optional[List[str]] = None
    medical_history: Optional[str] = Field(None, max_length=2000)
    allergies: Optional[List[str]] = None
    diagnosis: Optional[str] = Field(None, max_length=1000)
    treatment: Optional[str] = Field(None, max_length=2000)
    dietary_advice: Optional[str] = Field(None, max_length=1000)
    lifestyle_recommendations: Optional[str] = Field(None, max_length=1000)
    follow_up_required: Optional[bool] = None
    follow_up_date: Optional[datetime] = None
    follow_up_instructions: Optional[str] = Field(None, max_length=500)
    doctor_rating: Optional[int] = Field(None, ge=1, le=5)
    doctor_feedback: Optional[str] = Field(None, max_length=500)
    patient_satisfaction: Optional[int] = Field(None, ge=1, le=5)
    recording_url: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=1000)

    def to_domain(self) -> ConsultationUpdate:
        changes = self.model_dump(exclude_unset=True, exclude={"status"})
        for name in ("consultation_date", "follow_up_date"):
            if changes.get(name) is not None:
                changes[name] = to_naive_utc(changes[name])
        return ConsultationUpdate(changes=changes, status=self.status)


class RecordPrescriptionSchema(CamelModel):
    prescriptions: Optional[List[PrescriptionSchema]] = None
    diagnosis: Optional[str] = Field(None, max_length=1000)
    treatment: Optional[str] = Field(None, max_length=2000)
    dietary_advice: Optional[str] = Field(None, max_length=1000)
    lifestyle_recommendations: Optional[str] = Field(None, max_length=1000)


class RecordAssessmentSchema(CamelModel):
    prakriti: Optional[Dosha] = None
    vikriti: Optional[Dosha] = None
    pulse: Optional[str] = Field(None, max_length=200)
    tongue: Optional[str] = Field(None, max_length=200)


class ConsultationSchema(CamelModel):
    id: str
    doctor_id: str
    patient_name: str
    patient_email: str
    patient_phone: str
    patient_age: int
    patient_gender: str
    consultation_type: str
    consultation_date: datetime
    duration: int
    actual_duration: Optional[int] = None
    chief_complaint: Optional[str] = None
    symptoms: List[str]
    medical_history: Optional[str] = None
    current_medications: List[MedicationSchema]
    allergies: List[str]
    prakriti: Optional[str] = None
    vikriti: Optional[str] = None
    pulse: Optional[str] = None
    tongue: Optional[str] = None
    diagnosis: Optional[str] = None
    treatment: Optional[str] = None
    prescriptions: List[PrescriptionSchema]
    dietary_advice: Optional[str] = None
    lifestyle_recommendations: Optional[str] = None
    follow_up_required: bool
    follow_up_date: Optional[datetime] = None
    follow_up_instructions: Optional[str] = None
    status: str
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    consultation_fee: float
    payment_status: str
    transaction_id: Optional[str] = None
    doctor_rating: Optional[int] = None
    doctor_feedback: Optional[str] = None
    patient_satisfaction: Optional[int] = None
    meeting_id: Optional[str] = None
    recording_url: Optional[str] = None
    notes: Optional[str] = None
    attachments: List[AttachmentSchema]
    created_at: datetime
    updated_at: datetime


class ConsultationData(CamelModel):
    consultation: ConsultationSchema


class ConsultationListData(CamelModel):
    consultations: List[ConsultationSchema]
    pagination: Pagination


class ConsultationStatsSchema(CamelModel):
    total_consultations: int
    completed_consultations: int
    scheduled_consultations: int
    cancelled_consultations: int
    total_revenue: float
    average_consultation_fee: float
    average_rating: Optional[float] = None


class ConsultationStatsData(CamelModel):
    summary: ConsultationStatsSchema
