"""Doctor login use case."""

import logging

from ...core.auth import create_doctor_token, verify_password
from ...domain.errors import InvalidCredentialsError
from ..dto.doctor_dto import DoctorAuthResult, LoginRequest
from ..ports.repositories.doctor_repo import DoctorRepository

logger = logging.getLogger("amrutam")


class AuthenticateDoctorUseCase:
    """Check credentials, stamp the login time and issue a fresh token."""

    def __init__(self, doctor_repository: DoctorRepository):
        self._doctor_repository = doctor_repository

    async def execute(self, request: LoginRequest) -> DoctorAuthResult:
        doctor = await self._doctor_repository.find_by_email(request.email.strip().lower())
        # Same error for unknown email and wrong password
        if not doctor or not verify_password(request.password, doctor.password_hash):
            logger.info("Rejected doctor login")
            raise InvalidCredentialsError()

        doctor.record_login()
        doctor = await self._doctor_repository.save(doctor)
        return DoctorAuthResult(doctor=doctor, token=create_doctor_token(doctor.id))
