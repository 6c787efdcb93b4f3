"""FastAPI dependency providers."""

from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..adapters.db.mongo.repositories.appointment_repository import MongoAppointmentRepository
from ..adapters.db.mongo.repositories.consultation_repository import MongoConsultationRepository
from ..adapters.db.mongo.repositories.contact_repository import MongoContactRepository
from ..adapters.db.mongo.repositories.doctor_repository import MongoDoctorRepository
from ..adapters.db.mongo.repositories.payment_repository import MongoPaymentRepository
from ..application.ports.repositories.appointment_repo import AppointmentRepository
from ..application.ports.repositories.consultation_repo import ConsultationRepository
from ..application.ports.repositories.contact_repo import ContactRepository
from ..application.ports.repositories.doctor_repo import DoctorRepository
from ..application.ports.repositories.payment_repo import PaymentRepository
from ..core.auth import TokenError, doctor_id_from_token
from .errors import UnauthorizedError

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache()
def get_doctor_repository() -> DoctorRepository:
    return MongoDoctorRepository()


@lru_cache()
def get_appointment_repository() -> AppointmentRepository:
    return MongoAppointmentRepository()


@lru_cache()
def get_consultation_repository() -> ConsultationRepository:
    return MongoConsultationRepository()


@lru_cache()
def get_contact_repository() -> ContactRepository:
    return MongoContactRepository()


@lru_cache()
def get_payment_repository() -> PaymentRepository:
    return MongoPaymentRepository()


def get_current_doctor_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """
    Resolve the doctor id from the ``Authorization: Bearer`` header.

    Only the doctor's own profile routes depend on this; the rest of the
    API is open.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Not authorized, no token")
    try:
        return doctor_id_from_token(credentials.credentials)
    except TokenError:
        raise UnauthorizedError("Not authorized, token failed")


# Dependency annotations for FastAPI
DoctorRepositoryDep = Annotated[DoctorRepository, Depends(get_doctor_repository)]
AppointmentRepositoryDep = Annotated[AppointmentRepository, Depends(get_appointment_repository)]
ConsultationRepositoryDep = Annotated[ConsultationRepository, Depends(get_consultation_repository)]
ContactRepositoryDep = Annotated[ContactRepository, Depends(get_contact_repository)]
PaymentRepositoryDep = Annotated[PaymentRepository, Depends(get_payment_repository)]
CurrentDoctorDep = Annotated[str, Depends(get_current_doctor_id)]
