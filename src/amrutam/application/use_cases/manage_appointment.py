"""Appointment lifecycle use cases: status updates, rescheduling and cancellation."""

import logging
from typing import Optional

from ...core.config import get_settings
from ...core.utils.datetime_utils import utc_now
from ...domain.entities.appointment import Appointment
from ...domain.enums.scheduling import AppointmentStatus
from ...domain.errors import (
    AppointmentNotCancellableError,
    AppointmentNotFoundError,
    AppointmentNotReschedulableError,
    InvalidStatusError,
    SlotAlreadyBookedError,
)
from ..dto.appointment_dto import RescheduleAppointmentRequest
from ..ports.repositories.appointment_repo import AppointmentRepository

logger = logging.getLogger("amrutam")

VALID_STATUSES = {s.value for s in AppointmentStatus}


async def _load(repository: AppointmentRepository, appointment_id: str) -> Appointment:
    appointment = await repository.find_by_id(appointment_id)
    if not appointment:
        raise AppointmentNotFoundError(appointment_id)
    return appointment


class UpdateAppointmentStatusUseCase:
    def __init__(self, appointment_repository: AppointmentRepository):
        self._appointment_repository = appointment_repository

    async def execute(self, appointment_id: str, status: str, notes: Optional[str] = None) -> Appointment:
        appointment = await _load(self._appointment_repository, appointment_id)
        if status not in VALID_STATUSES:
            raise InvalidStatusError(status)

        appointment.update_status(status, notes)
        appointment = await self._appointment_repository.save(appointment)
        logger.info(f"Appointment status updated: id={appointment.id} status={status}")
        return appointment


class RescheduleAppointmentUseCase:
    """Move an appointment to a new slot, bounded by the reschedule window and count."""

    def __init__(self, appointment_repository: AppointmentRepository):
        self._appointment_repository = appointment_repository

    async def execute(self, appointment_id: str, request: RescheduleAppointmentRequest) -> Appointment:
        booking = get_settings().booking
        appointment = await _load(self._appointment_repository, appointment_id)

        if not appointment.can_be_rescheduled(
            utc_now(),
            window_hours=booking.reschedule_window_hours,
            max_reschedules=booking.max_reschedules,
        ):
            raise AppointmentNotReschedulableError(appointment_id)

        clash = await self._appointment_repository.find_active_in_slot(
            appointment.doctor_id,
            request.new_date,
            request.new_time,
            exclude_id=appointment.id,
        )
        if clash:
            raise SlotAlreadyBookedError("The new time slot is already booked")

        appointment.reschedule(
            request.new_date, request.new_time, request.reason, request.rescheduled_by
        )
        appointment = await self._appointment_repository.save(appointment)
        logger.info(
            f"Appointment rescheduled: id={appointment.id} "
            f"count={appointment.rescheduling_count}"
        )
        return appointment


class CancelAppointmentUseCase:
    def __init__(self, appointment_repository: AppointmentRepository):
        self._appointment_repository = appointment_repository

    async def execute(
        self,
        appointment_id: str,
        reason: Optional[str] = None,
        cancelled_by: Optional[str] = None,
    ) -> Appointment:
        booking = get_settings().booking
        appointment = await _load(self._appointment_repository, appointment_id)

        now = utc_now()
        if not appointment.can_be_cancelled(now, window_hours=booking.cancellation_window_hours):
            raise AppointmentNotCancellableError(appointment_id)

        appointment.cancel(reason, cancelled_by, now)
        appointment = await self._appointment_repository.save(appointment)
        logger.info(f"Appointment cancelled: id={appointment.id}")
        return appointment
