"""Update Doctor Profile use case."""

import logging
from dataclasses import fields

from ...core.utils.datetime_utils import utc_now
from ...domain.entities.doctor import Doctor
from ...domain.errors import DoctorNotFoundError
from ..dto.doctor_dto import DoctorProfileUpdate
from ..ports.repositories.doctor_repo import DoctorRepository

logger = logging.getLogger("amrutam")


class UpdateDoctorProfileUseCase:
    """Apply a doctor's own profile edits and re-evaluate completeness."""

    def __init__(self, doctor_repository: DoctorRepository):
        self._doctor_repository = doctor_repository

    async def execute(self, doctor_id: str, update: DoctorProfileUpdate) -> Doctor:
        doctor = await self._doctor_repository.find_by_id(doctor_id)
        if not doctor:
            raise DoctorNotFoundError(doctor_id)

        changed = []
        for f in fields(update):
            value = getattr(update, f.name)
            if value is not None:
                setattr(doctor, f.name, value)
                changed.append(f.name)

        # Re-run entity validation on the edited values
        doctor.validate()
        doctor.check_profile_complete()
        doctor.updated_at = utc_now()
        doctor = await self._doctor_repository.save(doctor)

        logger.info(f"Doctor profile updated: id={doctor.id} fields={changed}")
        return doctor
