"""Appointment booking and lifecycle endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Query, status

from ...application.dto.queries import AppointmentQuery
from ...application.use_cases.available_slots import GetAvailableSlotsUseCase
from ...application.use_cases.book_appointment import BookAppointmentUseCase
from ...application.use_cases.manage_appointment import (
    CancelAppointmentUseCase,
    RescheduleAppointmentUseCase,
    UpdateAppointmentStatusUseCase,
)
from ...core.utils.datetime_utils import start_of_day, utc_now
from ...domain.enums.scheduling import AppointmentStatus
from ...domain.errors import AppointmentNotFoundError
from ..deps import AppointmentRepositoryDep, DoctorRepositoryDep
from ..schemas.appointment import (
    AppointmentData,
    AppointmentListData,
    AppointmentSchema,
    BookAppointmentSchema,
    CancelAppointmentSchema,
    RescheduleAppointmentSchema,
    SlotAvailabilitySchema,
    UpdateAppointmentStatusSchema,
)
from ..schemas.common import ApiResponse, ErrorResponse, Pagination
from ..utils.responses import ok

router = APIRouter(prefix="/appointments", tags=["appointments"])


def _appointment_data(appointment) -> AppointmentData:
    return AppointmentData(appointment=AppointmentSchema.model_validate(appointment))


@router.post(
    "",
    response_model=ApiResponse[AppointmentData],
    status_code=status.HTTP_201_CREATED,
    summary="Book an appointment",
    responses={400: {"model": ErrorResponse, "description": "Doctor unavailable or slot already booked"}},
)
@router.post(
    "/", response_model=ApiResponse[AppointmentData], status_code=status.HTTP_201_CREATED, include_in_schema=False
)
async def book_appointment(
    request: BookAppointmentSchema,
    doctor_repo: DoctorRepositoryDep,
    appointment_repo: AppointmentRepositoryDep,
):
    appointment = await BookAppointmentUseCase(doctor_repo, appointment_repo).execute(request.to_domain())
    return ok(_appointment_data(appointment), message="Appointment scheduled successfully")


@router.get(
    "/doctor/{doctor_id}",
    response_model=ApiResponse[AppointmentListData],
    summary="A doctor's appointments",
)
async def doctor_appointments(
    doctor_id: str,
    appointment_repo: AppointmentRepositoryDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: Optional[AppointmentStatus] = Query(None),
    on_date: Optional[date] = Query(None, alias="date"),
    upcoming: bool = Query(False),
):
    query = AppointmentQuery(
        page=page,
        limit=limit,
        status=status.value if status else None,
        on_date=on_date,
        upcoming_after=start_of_day(utc_now().date()) if upcoming else None,
    )
    appointments, total = await appointment_repo.find_by_doctor(doctor_id, query)
    return ok(
        AppointmentListData(
            appointments=[AppointmentSchema.model_validate(a) for a in appointments],
            pagination=Pagination.build(page, limit, total),
        )
    )


@router.get(
    "/patient/{email}",
    response_model=ApiResponse[AppointmentListData],
    summary="A patient's appointments",
)
async def patient_appointments(
    email: str,
    appointment_repo: AppointmentRepositoryDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: Optional[AppointmentStatus] = Query(None),
):
    appointments, total = await appointment_repo.find_by_patient(
        email.strip().lower(), status.value if status else None, page, limit
    )
    return ok(
        AppointmentListData(
            appointments=[AppointmentSchema.model_validate(a) for a in appointments],
            pagination=Pagination.build(page, limit, total),
        )
    )


@router.get(
    "/slots/{doctor_id}/{day}",
    response_model=ApiResponse[SlotAvailabilitySchema],
    summary="Open slots for a doctor on a date",
    responses={404: {"model": ErrorResponse, "description": "Doctor not found"}},
)
async def available_slots(
    doctor_id: str,
    day: date,
    doctor_repo: DoctorRepositoryDep,
    appointment_repo: AppointmentRepositoryDep,
):
    availability = await GetAvailableSlotsUseCase(doctor_repo, appointment_repo).execute(doctor_id, day)
    return ok(SlotAvailabilitySchema.model_validate(availability))


@router.get(
    "/{appointment_id}",
    response_model=ApiResponse[AppointmentData],
    summary="One appointment",
    responses={404: {"model": ErrorResponse, "description": "Appointment not found"}},
)
async def get_appointment(appointment_id: str, appointment_repo: AppointmentRepositoryDep):
    appointment = await appointment_repo.find_by_id(appointment_id)
    if not appointment:
        raise AppointmentNotFoundError(appointment_id)
    return ok(_appointment_data(appointment))


@router.put(
    "/{appointment_id}/status",
    response_model=ApiResponse[AppointmentData],
    summary="Change an appointment's status",
)
async def update_appointment_status(
    appointment_id: str,
    request: UpdateAppointmentStatusSchema,
    appointment_repo: AppointmentRepositoryDep,
):
    appointment = await UpdateAppointmentStatusUseCase(appointment_repo).execute(
        appointment_id, request.status, request.notes
    )
    return ok(_appointment_data(appointment), message="Appointment status updated successfully")


@router.put(
    "/{appointment_id}/reschedule",
    response_model=ApiResponse[AppointmentData],
    summary="Move an appointment to another slot",
)
async def reschedule_appointment(
    appointment_id: str,
    request: RescheduleAppointmentSchema,
    appointment_repo: AppointmentRepositoryDep,
):
    appointment = await RescheduleAppointmentUseCase(appointment_repo).execute(
        appointment_id, request.to_domain()
    )
    return ok(_appointment_data(appointment), message="Appointment rescheduled successfully")


@router.put(
    "/{appointment_id}/cancel",
    response_model=ApiResponse[AppointmentData],
    summary="Cancel an appointment",
)
async def cancel_appointment(
    appointment_id: str,
    appointment_repo: AppointmentRepositoryDep,
    request: Optional[CancelAppointmentSchema] = None,
):
    request = request or CancelAppointmentSchema()
    appointment = await CancelAppointmentUseCase(appointment_repo).execute(
        appointment_id, request.reason, request.cancelled_by
    )
    return ok(_appointment_data(appointment), message="Appointment cancelled successfully")
