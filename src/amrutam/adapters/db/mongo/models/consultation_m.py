"""MongoDB Beanie model for Consultation documents."""

from datetime import datetime
from typing import List, Optional

import pymongo
from beanie import Document, PydanticObjectId
from pydantic import BaseModel, Field

from amrutam.core.utils.datetime_utils import utc_now


class MedicationMongo(BaseModel):
    name: str
    dosage: Optional[str] = None
    frequency: Optional[str] = None


class PrescriptionMongo(BaseModel):
    medicine_name: str
    dosage: str
    frequency: str
    duration: str
    instructions: str = "Take as prescribed"


class AttachmentMongo(BaseModel):
    file_name: Optional[str] = None
    file_url: Optional[str] = None
    file_type: Optional[str] = None
    uploaded_at: datetime = Field(default_factory=utc_now)


class ConsultationMongo(Document):
    """MongoDB model for Consultation entity."""

    doctor_id: PydanticObjectId = Field(..., description="Doctor reference")
    patient_name: str
    patient_email: str
    patient_phone: str
    patient_age: int
    patient_gender: str
    consultation_type: str
    consultation_date: datetime
    duration: int = Field(default=30)
    chief_complaint: Optional[str] = None
    symptoms: List[str] = Field(default_factory=list)
    medical_history: Optional[str] = None
    current_medications: List[MedicationMongo] = Field(default_factory=list)
    allergies: List[str] = Field(default_factory=list)
    prakriti: Optional[str] = None
    vikriti: Optional[str] = None
    pulse: Optional[str] = None
    tongue: Optional[str] = None
    diagnosis: Optional[str] = None
    treatment: Optional[str] = None
    prescriptions: List[PrescriptionMongo] = Field(default_factory=list)
    dietary_advice: Optional[str] = None
    lifestyle_recommendations: Optional[str] = None
    follow_up_required: bool = Field(default=False)
    follow_up_date: Optional[datetime] = None
    follow_up_instructions: Optional[str] = None
    status: str = Field(default="scheduled")
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    consultation_fee: float = Field(default=0)
    payment_status: str = Field(default="pending")
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    doctor_rating: Optional[int] = None
    doctor_feedback: Optional[str] = None
    patient_satisfaction: Optional[int] = None
    meeting_id: Optional[str] = None
    recording_url: Optional[str] = None
    notes: Optional[str] = None
    attachments: List[AttachmentMongo] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    class Settings:
        name = "consultations"
        indexes = [
            [("doctor_id", pymongo.ASCENDING), ("consultation_date", pymongo.DESCENDING)],
            "patient_email",
            "status",
            [("consultation_date", pymongo.DESCENDING)],
        ]
