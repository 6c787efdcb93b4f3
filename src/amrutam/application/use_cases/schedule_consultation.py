"""Schedule Consultation use case."""

import logging

from ...domain.entities.consultation import Consultation
from ...domain.enums.scheduling import REMOTE_MODES
from ...domain.errors import DoctorUnavailableError
from ..dto.consultation_dto import CreateConsultationRequest
from ..ports.repositories.consultation_repo import ConsultationRepository
from ..ports.repositories.doctor_repo import DoctorRepository

logger = logging.getLogger("amrutam")


class ScheduleConsultationUseCase:
    """Create a consultation with an active, verified doctor."""

    def __init__(
        self,
        doctor_repository: DoctorRepository,
        consultation_repository: ConsultationRepository,
    ):
        self._doctor_repository = doctor_repository
        self._consultation_repository = consultation_repository

    async def execute(self, request: CreateConsultationRequest) -> Consultation:
        doctor = await self._doctor_repository.find_by_id(request.doctor_id)
        if not doctor or not doctor.is_bookable:
            raise DoctorUnavailableError(request.doctor_id)

        consultation = Consultation(
            doctor_id=doctor.id,
            patient_name=request.patient_name.strip(),
            patient_email=request.patient_email,
            patient_phone=request.patient_phone,
            patient_age=request.patient_age,
            patient_gender=request.patient_gender,
            consultation_type=request.consultation_type,
            consultation_date=request.consultation_date,
            duration=request.duration,
            chief_complaint=request.chief_complaint,
            symptoms=list(request.symptoms),
            medical_history=request.medical_history,
            current_medications=list(request.current_medications),
            allergies=list(request.allergies),
            consultation_fee=doctor.consultation_fee,
        )
        consultation = await self._consultation_repository.save(consultation)

        if consultation.consultation_type in REMOTE_MODES:
            consultation.meeting_id = f"amrutam-{consultation.id[-8:]}"
            consultation = await self._consultation_repository.save(consultation)

        logger.info(f"Consultation scheduled: id={consultation.id} doctor_id={doctor.id}")
        return consultation
