"""
Mongo adapter wiring: repositories load, implement their ports and back the API by default.
"""

import importlib

import pytest

from amrutam.adapters.db.mongo.ids import to_object_id, to_str_id
from amrutam.adapters.db.mongo.models import DOCUMENT_MODELS
from amrutam.api import deps
from amrutam.application.ports.repositories.appointment_repo import AppointmentRepository
from amrutam.application.ports.repositories.consultation_repo import ConsultationRepository
from amrutam.application.ports.repositories.contact_repo import ContactRepository
from amrutam.application.ports.repositories.doctor_repo import DoctorRepository
from amrutam.application.ports.repositories.payment_repo import PaymentRepository

REPOSITORIES = "amrutam.adapters.db.mongo.repositories"


@pytest.mark.parametrize(
    "module, class_name, port",
    [
        ("doctor_repository", "MongoDoctorRepository", DoctorRepository),
        ("appointment_repository", "MongoAppointmentRepository", AppointmentRepository),
        ("consultation_repository", "MongoConsultationRepository", ConsultationRepository),
        ("contact_repository", "MongoContactRepository", ContactRepository),
        ("payment_repository", "MongoPaymentRepository", PaymentRepository),
    ],
)
def test_repository_implements_port(module, class_name, port):
    repository_class = getattr(importlib.import_module(f"{REPOSITORIES}.{module}"), class_name)
    assert issubclass(repository_class, port)
    assert isinstance(repository_class(), port)


@pytest.mark.parametrize(
    "provider, port",
    [
        (deps.get_doctor_repository, DoctorRepository),
        (deps.get_appointment_repository, AppointmentRepository),
        (deps.get_consultation_repository, ConsultationRepository),
        (deps.get_contact_repository, ContactRepository),
        (deps.get_payment_repository, PaymentRepository),
    ],
)
def test_default_providers_return_mongo_repositories(provider, port):
    repository = provider()
    assert isinstance(repository, port)
    assert type(repository).__module__.startswith(REPOSITORIES)


def test_document_models_registered():
    names = {model.__name__ for model in DOCUMENT_MODELS}
    assert names == {"DoctorMongo", "AppointmentMongo", "ConsultationMongo", "ContactMongo", "PaymentMongo"}


def test_object_id_conversion():
    assert to_object_id("not-an-id") is None
    assert to_object_id(None) is None
    object_id = to_object_id("65f0c0ffee0000000000abcd")
    assert to_str_id(object_id) == "65f0c0ffee0000000000abcd"
