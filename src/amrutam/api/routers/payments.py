"""Payment endpoints: simulated gateway flow, refunds, earnings and withdrawals."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Query, status

from ...application.dto.queries import PaymentQuery
from ...application.use_cases.doctor_earnings import EarningsSummaryUseCase, WithdrawEarningsUseCase
from ...application.use_cases.process_payment import (
    CompletePaymentUseCase,
    InitiatePaymentUseCase,
    RefundPaymentUseCase,
    load_payment,
)
from ...core.utils.datetime_utils import to_naive_utc
from ...domain.enums.payment import EarningsPeriod, PaymentStatus
from ..deps import (
    AppointmentRepositoryDep,
    ConsultationRepositoryDep,
    DoctorRepositoryDep,
    PaymentRepositoryDep,
)
from ..schemas.common import ApiResponse, ErrorResponse, Pagination
from ..schemas.payment import (
    CompletePaymentSchema,
    EarningsData,
    EarningsSummarySchema,
    FeeBreakdownSchema,
    GatewayResponseSchema,
    InitiatePaymentData,
    InitiatePaymentSchema,
    PaymentData,
    PaymentHeadSchema,
    PaymentListData,
    PaymentSchema,
    PeriodSchema,
    RefundData,
    RefundSchema,
    RefundSummarySchema,
    WithdrawalData,
    WithdrawSchema,
)
from ..utils.responses import ok

router = APIRouter(prefix="/payments", tags=["payments"])


@router.post(
    "/initiate",
    response_model=ApiResponse[InitiatePaymentData],
    status_code=status.HTTP_201_CREATED,
    summary="Price a service and open a pending payment",
    responses={404: {"model": ErrorResponse, "description": "Doctor or service not found"}},
)
async def initiate_payment(
    request: InitiatePaymentSchema,
    doctor_repo: DoctorRepositoryDep,
    consultation_repo: ConsultationRepositoryDep,
    appointment_repo: AppointmentRepositoryDep,
    payment_repo: PaymentRepositoryDep,
):
    use_case = InitiatePaymentUseCase(doctor_repo, consultation_repo, appointment_repo, payment_repo)
    result = await use_case.execute(request.to_domain())
    data = InitiatePaymentData(
        payment=PaymentHeadSchema.model_validate(result.payment),
        gateway_response=GatewayResponseSchema.model_validate(result.gateway_response),
        breakdown=FeeBreakdownSchema.from_breakdown(result.breakdown),
    )
    return ok(data, message="Payment initiated successfully")


@router.post(
    "/complete",
    response_model=ApiResponse[PaymentData],
    summary="Apply a gateway callback to a payment",
    responses={404: {"model": ErrorResponse, "description": "Payment not found"}},
)
async def complete_payment(
    request: CompletePaymentSchema,
    payment_repo: PaymentRepositoryDep,
    doctor_repo: DoctorRepositoryDep,
    consultation_repo: ConsultationRepositoryDep,
    appointment_repo: AppointmentRepositoryDep,
):
    use_case = CompletePaymentUseCase(payment_repo, doctor_repo, consultation_repo, appointment_repo)
    payment = await use_case.execute(request.to_domain())
    data = PaymentData(payment=PaymentSchema.model_validate(payment))
    return ok(data, message="Payment completed successfully")


@router.get("/doctor/{doctor_id}", response_model=ApiResponse[PaymentListData], summary="A doctor's payments")
async def doctor_payments(
    doctor_id: str,
    payment_repo: PaymentRepositoryDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: Optional[PaymentStatus] = Query(None),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
):
    query = PaymentQuery(
        page=page,
        limit=limit,
        status=status.value if status else None,
        start_date=to_naive_utc(start_date),
        end_date=to_naive_utc(end_date),
    )
    payments, total = await payment_repo.find_by_doctor(doctor_id, query)
    return ok(
        PaymentListData(
            payments=[PaymentSchema.model_validate(p) for p in payments],
            pagination=Pagination.build(page, limit, total),
        )
    )


@router.get("/patient/{email}", response_model=ApiResponse[PaymentListData], summary="A patient's payments")
async def patient_payments(
    email: str,
    payment_repo: PaymentRepositoryDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: Optional[PaymentStatus] = Query(None),
):
    payments, total = await payment_repo.find_by_patient(
        email.strip().lower(), status.value if status else None, page, limit
    )
    return ok(
        PaymentListData(
            payments=[PaymentSchema.model_validate(p) for p in payments],
            pagination=Pagination.build(page, limit, total),
        )
    )


@router.get("/earnings/{doctor_id}", response_model=ApiResponse[EarningsData], summary="Doctor earnings summary")
async def earnings_summary(
    doctor_id: str,
    payment_repo: PaymentRepositoryDep,
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    period: EarningsPeriod = Query(EarningsPeriod.MONTH),
):
    report = await EarningsSummaryUseCase(payment_repo).execute(
        doctor_id, to_naive_utc(start_date), to_naive_utc(end_date), period.value
    )
    data = EarningsData(
        doctor_id=report.doctor_id,
        period=PeriodSchema(start=report.start, end=report.end),
        summary=EarningsSummarySchema.model_validate(report.summary),
    )
    return ok(data)


@router.post(
    "/withdraw/{doctor_id}",
    response_model=ApiResponse[WithdrawalData],
    summary="Withdraw from the pending balance",
    responses={
        400: {"model": ErrorResponse, "description": "Amount exceeds pending balance"},
        404: {"model": ErrorResponse, "description": "Doctor not found"},
    },
)
async def withdraw_earnings(doctor_id: str, request: WithdrawSchema, doctor_repo: DoctorRepositoryDep):
    result = await WithdrawEarningsUseCase(doctor_repo).execute(request.to_domain(doctor_id))
    return ok(WithdrawalData.model_validate(result), message="Withdrawal request processed successfully")


@router.post(
    "/{transaction_id}/refund",
    response_model=ApiResponse[RefundData],
    summary="Refund a completed payment",
    responses={
        400: {"model": ErrorResponse, "description": "Payment not refundable"},
        404: {"model": ErrorResponse, "description": "Payment not found"},
    },
)
async def refund_payment(
    transaction_id: str,
    payment_repo: PaymentRepositoryDep,
    request: Optional[RefundSchema] = None,
):
    request = request or RefundSchema()
    result = await RefundPaymentUseCase(payment_repo).execute(request.to_domain(transaction_id))
    data = RefundData(
        refund=RefundSummarySchema.model_validate(result.refund),
        payment=PaymentSchema.model_validate(result.payment),
    )
    return ok(data, message="Refund processed successfully")


@router.get(
    "/{transaction_id}",
    response_model=ApiResponse[PaymentData],
    summary="One payment by transaction id",
    responses={404: {"model": ErrorResponse, "description": "Payment not found"}},
)
async def get_payment(transaction_id: str, payment_repo: PaymentRepositoryDep):
    payment = await load_payment(payment_repo, transaction_id)
    return ok(PaymentData(payment=PaymentSchema.model_validate(payment)))
