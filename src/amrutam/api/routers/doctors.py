"""Doctor directory, registration and profile endpoints."""

from typing import Optional

from fastapi import APIRouter, Query, status

from ...application.dto.queries import DoctorDirectoryQuery
from ...application.use_cases.authenticate_doctor import AuthenticateDoctorUseCase
from ...application.use_cases.register_doctor import RegisterDoctorUseCase
from ...application.use_cases.update_doctor_profile import UpdateDoctorProfileUseCase
from ...domain.enums.doctor import DoctorSort, Language, Specialization
from ...domain.errors import DoctorNotFoundError
from ..deps import CurrentDoctorDep, DoctorRepositoryDep
from ..schemas.common import ApiResponse, ErrorResponse, Pagination
from ..schemas.doctor import (
    AuthData,
    DoctorData,
    DoctorListData,
    DoctorProfileData,
    DoctorProfileSchema,
    DoctorPublicSchema,
    DoctorSearchData,
    DoctorStatsData,
    DoctorStatsSchema,
    DoctorSummarySchema,
    LoginSchema,
    RegisterDoctorSchema,
    UpdateDoctorProfileSchema,
)
from ..utils.responses import ok

router = APIRouter(prefix="/doctors", tags=["doctors"])


@router.post(
    "/register",
    response_model=ApiResponse[AuthData],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new doctor",
    responses={400: {"model": ErrorResponse, "description": "Duplicate email or license number"}},
)
async def register_doctor(request: RegisterDoctorSchema, doctor_repo: DoctorRepositoryDep):
    result = await RegisterDoctorUseCase(doctor_repo).execute(request.to_domain())
    data = AuthData(doctor=DoctorSummarySchema.model_validate(result.doctor), token=result.token)
    return ok(data, message="Doctor registered successfully")


@router.post(
    "/login",
    response_model=ApiResponse[AuthData],
    summary="Log a doctor in and issue a bearer token",
    responses={401: {"model": ErrorResponse, "description": "Invalid email or password"}},
)
async def login_doctor(request: LoginSchema, doctor_repo: DoctorRepositoryDep):
    result = await AuthenticateDoctorUseCase(doctor_repo).execute(request.to_domain())
    data = AuthData(doctor=DoctorSummarySchema.model_validate(result.doctor), token=result.token)
    return ok(data, message="Login successful")


@router.get("", response_model=ApiResponse[DoctorListData], summary="List verified doctors")
@router.get("/", response_model=ApiResponse[DoctorListData], include_in_schema=False)
async def list_doctors(
    doctor_repo: DoctorRepositoryDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    specialization: Optional[Specialization] = Query(None),
    city: Optional[str] = Query(None),
    min_fee: Optional[float] = Query(None, alias="minFee", ge=0),
    max_fee: Optional[float] = Query(None, alias="maxFee", ge=0),
    language: Optional[Language] = Query(None),
    sort_by: DoctorSort = Query(DoctorSort.RATING, alias="sortBy"),
):
    query = DoctorDirectoryQuery(
        page=page,
        limit=limit,
        specialization=specialization.value if specialization else None,
        city=city,
        min_fee=min_fee,
        max_fee=max_fee,
        language=language.value if language else None,
        sort_by=sort_by.value,
    )
    doctors, total = await doctor_repo.find_listed(query)
    return ok(
        DoctorListData(
            doctors=[DoctorPublicSchema.model_validate(d) for d in doctors],
            pagination=Pagination.build(page, limit, total),
        )
    )


@router.get("/stats/summary", response_model=ApiResponse[DoctorStatsData], summary="Directory statistics")
async def doctor_stats(doctor_repo: DoctorRepositoryDep):
    stats = await doctor_repo.summary_stats()
    return ok(DoctorStatsData(summary=DoctorStatsSchema.model_validate(stats)))


@router.get("/search/{query}", response_model=ApiResponse[DoctorSearchData], summary="Search doctors")
async def search_doctors(
    query: str,
    doctor_repo: DoctorRepositoryDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
):
    doctors, total = await doctor_repo.search(query, page, limit)
    return ok(
        DoctorSearchData(
            doctors=[DoctorPublicSchema.model_validate(d) for d in doctors],
            pagination=Pagination.build(page, limit, total),
            query=query,
        )
    )


@router.get(
    "/me",
    response_model=ApiResponse[DoctorProfileData],
    summary="The authenticated doctor's own profile",
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid token"}},
)
async def get_my_profile(doctor_id: CurrentDoctorDep, doctor_repo: DoctorRepositoryDep):
    doctor = await doctor_repo.find_by_id(doctor_id)
    if not doctor:
        raise DoctorNotFoundError(doctor_id)
    return ok(DoctorProfileData(doctor=DoctorProfileSchema.model_validate(doctor)))


@router.put(
    "/me",
    response_model=ApiResponse[DoctorProfileData],
    summary="Edit the authenticated doctor's profile",
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid token"}},
)
async def update_my_profile(
    request: UpdateDoctorProfileSchema,
    doctor_id: CurrentDoctorDep,
    doctor_repo: DoctorRepositoryDep,
):
    doctor = await UpdateDoctorProfileUseCase(doctor_repo).execute(doctor_id, request.to_domain())
    data = DoctorProfileData(doctor=DoctorProfileSchema.model_validate(doctor))
    return ok(data, message="Profile updated successfully")


@router.get(
    "/{doctor_id}",
    response_model=ApiResponse[DoctorData],
    summary="Public profile of one doctor",
    responses={404: {"model": ErrorResponse, "description": "Doctor not found"}},
)
async def get_doctor(doctor_id: str, doctor_repo: DoctorRepositoryDep):
    doctor = await doctor_repo.find_by_id(doctor_id)
    if not doctor:
        raise DoctorNotFoundError(doctor_id)
    return ok(DoctorData(doctor=DoctorPublicSchema.model_validate(doctor)))
