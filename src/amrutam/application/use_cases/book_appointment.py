"""Book Appointment use case.

The slot check and the insert are two separate round trips; two concurrent
bookings for the same slot can both pass the check.
"""

import logging

from ...core.config import get_settings
from ...domain.entities.appointment import Appointment
from ...domain.enums.scheduling import REMOTE_MODES
from ...domain.errors import DoctorUnavailableError, SlotAlreadyBookedError
from ..dto.appointment_dto import BookAppointmentRequest
from ..ports.repositories.appointment_repo import AppointmentRepository
from ..ports.repositories.doctor_repo import DoctorRepository

logger = logging.getLogger("amrutam")


class BookAppointmentUseCase:
    """Use case for booking a doctor's slot."""

    def __init__(
        self,
        doctor_repository: DoctorRepository,
        appointment_repository: AppointmentRepository,
    ):
        self._doctor_repository = doctor_repository
        self._appointment_repository = appointment_repository

    async def execute(self, request: BookAppointmentRequest) -> Appointment:
        doctor = await self._doctor_repository.find_by_id(request.doctor_id)
        if not doctor or not doctor.is_bookable:
            raise DoctorUnavailableError(request.doctor_id)

        clash = await self._appointment_repository.find_active_in_slot(
            doctor.id, request.appointment_date, request.appointment_time
        )
        if clash:
            raise SlotAlreadyBookedError()

        appointment = Appointment(
            doctor_id=doctor.id,
            patient_name=request.patient_name.strip(),
            patient_email=request.patient_email,
            patient_phone=request.patient_phone,
            patient_age=request.patient_age,
            appointment_date=request.appointment_date,
            appointment_time=request.appointment_time,
            duration=request.duration,
            appointment_type=request.appointment_type,
            consultation_mode=request.consultation_mode,
            reason_for_visit=request.reason_for_visit,
            symptoms=list(request.symptoms),
            urgency_level=request.urgency_level,
            booked_by=request.booked_by,
            special_instructions=request.special_instructions,
            is_follow_up=request.is_follow_up,
            parent_consultation_id=request.parent_consultation_id,
            consultation_fee=doctor.consultation_fee,
        )
        appointment = await self._appointment_repository.save(appointment)

        if appointment.consultation_mode in REMOTE_MODES:
            appointment.assign_meeting_room(get_settings().booking.meeting_base_url)
            appointment = await self._appointment_repository.save(appointment)

        logger.info(
            f"Appointment booked: id={appointment.id} doctor_id={doctor.id} "
            f"date={appointment.appointment_date} time={appointment.appointment_time}"
        )
        return appointment
