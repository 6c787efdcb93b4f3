"""
Shared fixtures: an app wired to in-memory repositories and a verified doctor.
"""

import os
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("SECURITY_SECRET_KEY", "test-secret-key-for-amrutam-portal-0123456789")
os.environ.setdefault("SECURITY_BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from amrutam.api import deps  # noqa: E402
from amrutam.app import create_app  # noqa: E402
from amrutam.core.config import reset_settings  # noqa: E402
from fakes import (  # noqa: E402
    InMemoryAppointmentRepository,
    InMemoryConsultationRepository,
    InMemoryContactRepository,
    InMemoryDoctorRepository,
    InMemoryPaymentRepository,
)
from helpers import register_doctor, verify_doctor  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_settings():
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def repos():
    return SimpleNamespace(
        doctors=InMemoryDoctorRepository(),
        appointments=InMemoryAppointmentRepository(),
        consultations=InMemoryConsultationRepository(),
        contacts=InMemoryContactRepository(),
        payments=InMemoryPaymentRepository(),
    )


@pytest.fixture
def app(repos):
    app = create_app(use_lifespan=False)
    app.dependency_overrides[deps.get_doctor_repository] = lambda: repos.doctors
    app.dependency_overrides[deps.get_appointment_repository] = lambda: repos.appointments
    app.dependency_overrides[deps.get_consultation_repository] = lambda: repos.consultations
    app.dependency_overrides[deps.get_contact_repository] = lambda: repos.contacts
    app.dependency_overrides[deps.get_payment_repository] = lambda: repos.payments
    return app


@pytest.fixture
def client(app):
    """Create a test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def doctor(client, repos):
    """A registered, verified doctor: ``id``, ``token`` and the saved entity."""
    data = register_doctor(client)
    doctor_id = data["doctor"]["id"]
    entity = verify_doctor(repos, doctor_id)
    return SimpleNamespace(id=doctor_id, token=data["token"], entity=entity)
