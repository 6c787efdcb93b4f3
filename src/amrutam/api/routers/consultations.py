"""Consultation endpoints: scheduling, clinical record and statistics."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Query, status

from ...application.dto.queries import ConsultationQuery
from ...application.use_cases.schedule_consultation import ScheduleConsultationUseCase
from ...application.use_cases.update_consultation import (
    RecordAssessmentUseCase,
    RecordTreatmentUseCase,
    UpdateConsultationUseCase,
)
from ...core.utils.datetime_utils import to_naive_utc
from ...domain.enums.scheduling import ConsultationSort, ConsultationStatus
from ...domain.errors import ConsultationNotFoundError
from ..deps import ConsultationRepositoryDep, DoctorRepositoryDep
from ..schemas.common import ApiResponse, ErrorResponse, Pagination
from ..schemas.consultation import (
    ConsultationData,
    ConsultationListData,
    ConsultationSchema,
    ConsultationStatsData,
    ConsultationStatsSchema,
    CreateConsultationSchema,
    RecordAssessmentSchema,
    RecordPrescriptionSchema,
    UpdateConsultationSchema,
)
from ..utils.responses import ok

router = APIRouter(prefix="/consultations", tags=["consultations"])


def _consultation_data(consultation) -> ConsultationData:
    return ConsultationData(consultation=ConsultationSchema.model_validate(consultation))


@router.post(
    "",
    response_model=ApiResponse[ConsultationData],
    status_code=status.HTTP_201_CREATED,
    summary="Schedule a consultation",
    responses={400: {"model": ErrorResponse, "description": "Doctor not found or not available"}},
)
@router.post(
    "/", response_model=ApiResponse[ConsultationData], status_code=status.HTTP_201_CREATED, include_in_schema=False
)
async def create_consultation(
    request: CreateConsultationSchema,
    doctor_repo: DoctorRepositoryDep,
    consultation_repo: ConsultationRepositoryDep,
):
    consultation = await ScheduleConsultationUseCase(doctor_repo, consultation_repo).execute(
        request.to_domain()
    )
    return ok(_consultation_data(consultation), message="Consultation scheduled successfully")


@router.get(
    "/doctor/{doctor_id}",
    response_model=ApiResponse[ConsultationListData],
    summary="A doctor's consultations",
)
async def doctor_consultations(
    doctor_id: str,
    consultation_repo: ConsultationRepositoryDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: Optional[ConsultationStatus] = Query(None),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    sort_by: ConsultationSort = Query(ConsultationSort.DATE_DESC, alias="sortBy"),
):
    query = ConsultationQuery(
        page=page,
        limit=limit,
        status=status.value if status else None,
        start_date=to_naive_utc(start_date),
        end_date=to_naive_utc(end_date),
        sort_by=sort_by.value,
    )
    consultations, total = await consultation_repo.find_by_doctor(doctor_id, query)
    return ok(
        ConsultationListData(
            consultations=[ConsultationSchema.model_validate(c) for c in consultations],
            pagination=Pagination.build(page, limit, total),
        )
    )


@router.get(
    "/stats/summary",
    response_model=ApiResponse[ConsultationStatsData],
    summary="Consultation statistics",
)
async def consultation_stats(
    consultation_repo: ConsultationRepositoryDep,
    doctor_id: Optional[str] = Query(None, alias="doctorId"),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
):
    stats = await consultation_repo.stats(doctor_id, to_naive_utc(start_date), to_naive_utc(end_date))
    return ok(ConsultationStatsData(summary=ConsultationStatsSchema.model_validate(stats)))


@router.get(
    "/{consultation_id}",
    response_model=ApiResponse[ConsultationData],
    summary="One consultation",
    responses={404: {"model": ErrorResponse, "description": "Consultation not found"}},
)
async def get_consultation(consultation_id: str, consultation_repo: ConsultationRepositoryDep):
    consultation = await consultation_repo.find_by_id(consultation_id)
    if not consultation:
        raise ConsultationNotFoundError(consultation_id)
    return ok(_consultation_data(consultation))


@router.put(
    "/{consultation_id}",
    response_model=ApiResponse[ConsultationData],
    summary="Edit a consultation or move it through its status flow",
    responses={404: {"model": ErrorResponse, "description": "Consultation not found"}},
)
async def update_consultation(
    consultation_id: str,
    request: UpdateConsultationSchema,
    consultation_repo: ConsultationRepositoryDep,
    doctor_repo: DoctorRepositoryDep,
):
    consultation = await UpdateConsultationUseCase(consultation_repo, doctor_repo).execute(
        consultation_id, request.to_domain()
    )
    return ok(_consultation_data(consultation), message="Consultation updated successfully")


@router.post(
    "/{consultation_id}/prescription",
    response_model=ApiResponse[ConsultationData],
    summary="Record the treatment plan",
    responses={404: {"model": ErrorResponse, "description": "Consultation not found"}},
)
async def add_prescription(
    consultation_id: str,
    request: RecordPrescriptionSchema,
    consultation_repo: ConsultationRepositoryDep,
):
    consultation = await RecordTreatmentUseCase(consultation_repo).execute(
        consultation_id,
        prescriptions=[p.to_domain() for p in request.prescriptions] if request.prescriptions else None,
        diagnosis=request.diagnosis,
        treatment=request.treatment,
        dietary_advice=request.dietary_advice,
        lifestyle_recommendations=request.lifestyle_recommendations,
    )
    return ok(_consultation_data(consultation), message="Prescription added successfully")


@router.post(
    "/{consultation_id}/assessment",
    response_model=ApiResponse[ConsultationData],
    summary="Record the Ayurvedic assessment",
    responses={404: {"model": ErrorResponse, "description": "Consultation not found"}},
)
async def add_assessment(
    consultation_id: str,
    request: RecordAssessmentSchema,
    consultation_repo: ConsultationRepositoryDep,
):
    consultation = await RecordAssessmentUseCase(consultation_repo).execute(
        consultation_id,
        prakriti=request.prakriti,
        vikriti=request.vikriti,
        pulse=request.pulse,
        tongue=request.tongue,
    )
    return ok(_consultation_data(consultation), message="Ayurvedic assessment added successfully")
