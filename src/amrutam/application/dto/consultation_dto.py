"""Consultation DTOs for use case communication."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ...domain.entities.consultation import Medication


@dataclass
class CreateConsultationRequest:
    """Request DTO for scheduling a consultation."""

    doctor_id: str
    patient_name: str
    patient_email: str
    patient_phone: str
    patient_age: int
    patient_gender: str
    consultation_type: str
    consultation_date: datetime
    duration: int = 30
    chief_complaint: Optional[str] = None
    symptoms: List[str] = field(default_factory=list)
    medical_history: Optional[str] = None
    current_medications: List[Medication] = field(default_factory=list)
    allergies: List[str] = field(default_factory=list)


@dataclass
class ConsultationUpdate:
    """Changed fields of a consultation; ``status`` drives start/end stamping."""

    changes: Dict[str, Any]
    status: Optional[str] = None
