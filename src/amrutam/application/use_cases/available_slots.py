"""Available Slots use case: open time slots for a doctor on a date."""

from datetime import date

from ...core.utils.datetime_utils import day_name
from ...domain.errors import DoctorNotFoundError
from ..dto.appointment_dto import SlotAvailability
from ..ports.repositories.appointment_repo import AppointmentRepository
from ..ports.repositories.doctor_repo import DoctorRepository


class GetAvailableSlotsUseCase:
    def __init__(
        self,
        doctor_repository: DoctorRepository,
        appointment_repository: AppointmentRepository,
    ):
        self._doctor_repository = doctor_repository
        self._appointment_repository = appointment_repository

    async def execute(self, doctor_id: str, day: date) -> SlotAvailability:
        doctor = await self._doctor_repository.find_by_id(doctor_id)
        if not doctor:
            raise DoctorNotFoundError(doctor_id)

        weekday = day_name(day)
        configured = doctor.slots_for(weekday)
        booked = set(await self._appointment_repository.booked_times(doctor.id, day))

        available = [
            slot for slot in configured
            if slot.is_available and slot.start_time not in booked
        ]
        return SlotAvailability(
            date=day,
            day_name=weekday,
            available_slots=available,
            total_slots=len(configured),
            booked_slots=len(booked),
        )
