"""
Test helpers shared across API test modules.
"""

import asyncio

from amrutam.domain.entities.doctor import DayAvailability, TimeSlot

ALL_WEEK = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def run(coro):
    """Run a coroutine to completion from a synchronous test."""
    return asyncio.run(coro)


def doctor_payload(**overrides):
    payload = {
        "fullName": "Dr. Meera Sharma",
        "email": "meera.sharma@example.com",
        "phone": "+919876543210",
        "password": "secret123",
        "medicalLicenseNumber": "AYU-2019-0042",
        "specialization": "Panchakarma",
        "experience": 8,
        "qualification": "BAMS, MD (Ayurveda)",
        "consultationFee": 500,
        "clinicAddress": {"city": "Pune", "state": "Maharashtra"},
        "languages": ["Hindi", "English", "Marathi"],
    }
    payload.update(overrides)
    return payload


def register_doctor(client, **overrides):
    response = client.post("/api/doctors/register", json=doctor_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()["data"]


def verify_doctor(repos, doctor_id, slots=("09:00", "10:00", "11:00"), **fields):
    """Mark a registered doctor verified and give them the same slots every day."""

    async def _verify():
        doctor = await repos.doctors.find_by_id(doctor_id)
        doctor.is_verified = True
        doctor.availability = [
            DayAvailability(
                day=day,
                time_slots=[TimeSlot(start_time=start, end_time=f"{int(start[:2]) + 1:02d}:00") for start in slots],
            )
            for day in ALL_WEEK
        ]
        for name, value in fields.items():
            setattr(doctor, name, value)
        return await repos.doctors.save(doctor)

    return run(_verify())


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}
