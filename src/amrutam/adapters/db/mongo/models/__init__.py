"""Beanie document models registered with ``init_beanie``."""

from .appointment_m import AppointmentMongo
from .consultation_m import ConsultationMongo
from .contact_m import ContactMongo
from .doctor_m import DoctorMongo
from .payment_m import PaymentMongo

DOCUMENT_MODELS = [DoctorMongo, AppointmentMongo, ConsultationMongo, ContactMongo, PaymentMongo]

__all__ = [
    "AppointmentMongo",
    "ConsultationMongo",
    "ContactMongo",
    "DoctorMongo",
    "PaymentMongo",
    "DOCUMENT_MODELS",
]
