"""Consultation update use cases: general edits, treatment plan and assessment."""

import logging
from typing import List, Optional

from ...core.utils.datetime_utils import utc_now
from ...domain.entities.consultation import Consultation, Prescription
from ...domain.errors import ConsultationNotFoundError
from ..dto.consultation_dto import ConsultationUpdate
from ..ports.repositories.consultation_repo import ConsultationRepository
from ..ports.repositories.doctor_repo import DoctorRepository

logger = logging.getLogger("amrutam")


async def _load(repository: ConsultationRepository, consultation_id: str) -> Consultation:
    consultation = await repository.find_by_id(consultation_id)
    if not consultation:
        raise ConsultationNotFoundError(consultation_id)
    return consultation


class UpdateConsultationUseCase:
    """Apply edits; completing a consultation bumps the doctor's consultation count."""

    def __init__(
        self,
        consultation_repository: ConsultationRepository,
        doctor_repository: DoctorRepository,
    ):
        self._consultation_repository = consultation_repository
        self._doctor_repository = doctor_repository

    async def execute(self, consultation_id: str, update: ConsultationUpdate) -> Consultation:
        consultation = await _load(self._consultation_repository, consultation_id)

        for name, value in update.changes.items():
            setattr(consultation, name, value)

        completed_now = False
        if update.status:
            completed_now = consultation.transition_to(update.status, utc_now())
        consultation.updated_at = utc_now()
        consultation = await self._consultation_repository.save(consultation)

        # Separate write; not rolled back if it fails
        if completed_now:
            doctor = await self._doctor_repository.find_by_id(consultation.doctor_id)
            if doctor:
                doctor.record_completed_consultation()
                await self._doctor_repository.save(doctor)
            logger.info(f"Consultation completed: id={consultation.id} duration={consultation.actual_duration}")
        return consultation


class RecordTreatmentUseCase:
    def __init__(self, consultation_repository: ConsultationRepository):
        self._consultation_repository = consultation_repository

    async def execute(
        self,
        consultation_id: str,
        prescriptions: Optional[List[Prescription]] = None,
        diagnosis: Optional[str] = None,
        treatment: Optional[str] = None,
        dietary_advice: Optional[str] = None,
        lifestyle_recommendations: Optional[str] = None,
    ) -> Consultation:
        consultation = await _load(self._consultation_repository, consultation_id)
        consultation.record_treatment(
            prescriptions=prescriptions,
            diagnosis=diagnosis,
            treatment=treatment,
            dietary_advice=dietary_advice,
            lifestyle_recommendations=lifestyle_recommendations,
        )
        return await self._consultation_repository.save(consultation)


class RecordAssessmentUseCase:
    def __init__(self, consultation_repository: ConsultationRepository):
        self._consultation_repository = consultation_repository

    async def execute(
        self,
        consultation_id: str,
        prakriti: Optional[str] = None,
        vikriti: Optional[str] = None,
        pulse: Optional[str] = None,
        tongue: Optional[str] = None,
    ) -> Consultation:
        consultation = await _load(self._consultation_repository, consultation_id)
        consultation.record_assessment(prakriti=prakriti, vikriti=vikriti, pulse=pulse, tongue=tongue)
        return await self._consultation_repository.save(consultation)
