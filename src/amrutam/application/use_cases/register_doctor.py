"""Register Doctor use case: create a practitioner account and issue a token."""

import logging

from ...core.auth import create_doctor_token, get_password_hash
from ...domain.entities.doctor import ClinicAddress, Doctor
from ...domain.enums.doctor import DEFAULT_LANGUAGES
from ...domain.errors import DuplicateDoctorError
from ..dto.doctor_dto import DoctorAuthResult, RegisterDoctorRequest
from ..ports.repositories.doctor_repo import DoctorRepository

logger = logging.getLogger("amrutam")


class RegisterDoctorUseCase:
    """Use case for registering a new doctor."""

    def __init__(self, doctor_repository: DoctorRepository):
        self._doctor_repository = doctor_repository

    async def execute(self, request: RegisterDoctorRequest) -> DoctorAuthResult:
        email = request.email.strip().lower()

        # Check-then-insert; the unique indexes catch what slips through
        existing = await self._doctor_repository.find_by_email_or_license(
            email, request.medical_license_number
        )
        if existing:
            raise DuplicateDoctorError(email, request.medical_license_number)

        doctor = Doctor(
            full_name=request.full_name.strip(),
            email=email,
            phone=request.phone,
            password_hash=get_password_hash(request.password),
            medical_license_number=request.medical_license_number.strip(),
            specialization=request.specialization,
            experience=request.experience,
            qualification=request.qualification.strip(),
            consultation_fee=request.consultation_fee,
            registration_body=request.registration_body,
            clinic_name=request.clinic_name,
            clinic_address=request.clinic_address or ClinicAddress(),
            languages=list(request.languages or [lang.value for lang in DEFAULT_LANGUAGES]),
            bio=request.bio,
        )
        doctor.check_profile_complete()
        doctor = await self._doctor_repository.save(doctor)

        logger.info(f"Doctor registered: id={doctor.id} specialization={doctor.specialization}")
        return DoctorAuthResult(doctor=doctor, token=create_doctor_token(doctor.id))
