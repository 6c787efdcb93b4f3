"""Payment use cases: initiation, gateway completion and refunds.

The gateway is simulated. Completing a payment updates the payment, the
linked service and the doctor's balances in separate writes, so a failure
part way through leaves them out of step.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from ...core.config import get_settings
from ...core.utils.string_utils import generate_reference, random_token
from ...domain.entities.payment import Payment, Taxes
from ...domain.enums.payment import PaymentStatus, ServiceModel, ServiceType
from ...domain.errors import (
    DoctorNotFoundError,
    PaymentAlreadyRefundedError,
    PaymentNotFoundError,
    PaymentNotRefundableError,
    RefundExceedsNetAmountError,
    ServiceNotFoundError,
)
from ..dto.payment_dto import (
    CompletePaymentRequest,
    InitiatePaymentRequest,
    InitiatePaymentResult,
    RefundRequest,
    RefundResult,
)
from ..ports.repositories.appointment_repo import AppointmentRepository
from ..ports.repositories.consultation_repo import ConsultationRepository
from ..ports.repositories.doctor_repo import DoctorRepository
from ..ports.repositories.payment_repo import PaymentRepository
from ..utils.billing import compute_fee_breakdown

logger = logging.getLogger("amrutam")


async def load_payment(repository: PaymentRepository, transaction_id: str) -> Payment:
    payment = await repository.find_by_transaction_id(transaction_id)
    if not payment:
        raise PaymentNotFoundError(transaction_id)
    return payment


class InitiatePaymentUseCase:
    """Price a consultation or appointment and open a pending payment."""

    def __init__(
        self,
        doctor_repository: DoctorRepository,
        consultation_repository: ConsultationRepository,
        appointment_repository: AppointmentRepository,
        payment_repository: PaymentRepository,
    ):
        self._doctor_repository = doctor_repository
        self._consultation_repository = consultation_repository
        self._appointment_repository = appointment_repository
        self._payment_repository = payment_repository

    async def _find_service(self, service_type: str, service_id: str) -> Tuple[Any, Optional[str]]:
        if service_type == ServiceType.CONSULTATION:
            service = await self._consultation_repository.find_by_id(service_id)
            return service, ServiceModel.CONSULTATION.value
        if service_type == ServiceType.APPOINTMENT:
            service = await self._appointment_repository.find_by_id(service_id)
            return service, ServiceModel.APPOINTMENT.value
        return None, None

    async def execute(self, request: InitiatePaymentRequest) -> InitiatePaymentResult:
        billing = get_settings().billing

        doctor = await self._doctor_repository.find_by_id(request.doctor_id)
        if not doctor:
            raise DoctorNotFoundError(request.doctor_id)

        service, service_model = await self._find_service(request.service_type, request.service_id)
        if not service:
            raise ServiceNotFoundError(request.service_type, request.service_id)

        fee = service.consultation_fee or doctor.consultation_fee
        breakdown = compute_fee_breakdown(fee, billing)

        payment = Payment(
            transaction_id=generate_reference("TXN", 9),
            order_id=generate_reference("ORD", 6),
            doctor_id=doctor.id,
            patient_email=request.patient_email,
            patient_name=request.patient_name,
            service_type=request.service_type,
            service_id=request.service_id,
            service_model=service_model,
            amount=breakdown.total_amount,
            currency=billing.currency,
            consultation_fee=fee,
            platform_fee=breakdown.platform_fee,
            processing_fee=breakdown.processing_fee,
            taxes=Taxes(gst=breakdown.gst, cgst=breakdown.cgst, sgst=breakdown.sgst),
            payment_method=request.payment_method,
            payment_provider=billing.payment_provider,
            billing_address=request.billing_address,
        )
        payment.apply_commission(billing.commission_percentage)
        payment = await self._payment_repository.save(payment)

        gateway_response: Dict[str, Any] = {
            "payment_id": f"pay_{random_token(14)}",
            "order_id": payment.order_id,
            "status": "created",
            "amount": payment.amount,
            "currency": payment.currency,
            "description": f"{request.service_type} with Dr. {doctor.full_name}",
            "notes": {
                "doctor_id": doctor.id,
                "service_type": request.service_type,
                "service_id": request.service_id,
            },
        }
        logger.info(
            f"Payment initiated: transaction_id={payment.transaction_id} "
            f"doctor_id={doctor.id} amount={payment.amount}"
        )
        return InitiatePaymentResult(payment=payment, gateway_response=gateway_response, breakdown=breakdown)


class CompletePaymentUseCase:
    """Apply a (simulated) gateway callback to a payment."""

    def __init__(
        self,
        payment_repository: PaymentRepository,
        doctor_repository: DoctorRepository,
        consultation_repository: ConsultationRepository,
        appointment_repository: AppointmentRepository,
    ):
        self._payment_repository = payment_repository
        self._doctor_repository = doctor_repository
        self._consultation_repository = consultation_repository
        self._appointment_repository = appointment_repository

    async def execute(self, request: CompletePaymentRequest) -> Payment:
        payment = await load_payment(self._payment_repository, request.transaction_id)
        if payment.status in (PaymentStatus.REFUNDED, PaymentStatus.PARTIALLY_REFUNDED):
            raise PaymentAlreadyRefundedError(payment.transaction_id, payment.status)
        # payment_date is stamped on the first completion and never cleared
        already_settled = payment.payment_date is not None

        payment.mark_status(request.status)
        payment.gateway_response = {
            "payment_id": request.payment_id,
            "signature": request.signature,
            "status": request.status,
            "message": "Payment completed successfully",
        }
        payment = await self._payment_repository.save(payment)

        if request.status == PaymentStatus.COMPLETED and not already_settled:
            await self._settle_completed(payment)
        return payment

    async def _settle_completed(self, payment: Payment) -> None:
        if payment.service_model == ServiceModel.CONSULTATION:
            await self._consultation_repository.mark_paid(payment.service_id, payment.transaction_id)
        elif payment.service_model == ServiceModel.APPOINTMENT:
            await self._appointment_repository.mark_paid(payment.service_id, payment.transaction_id)

        doctor = await self._doctor_repository.find_by_id(payment.doctor_id)
        if doctor:
            doctor.credit_earnings(payment.doctor_earning.net_amount or 0)
            await self._doctor_repository.save(doctor)
        logger.info(
            f"Payment completed: transaction_id={payment.transaction_id} "
            f"net_earning={payment.doctor_earning.net_amount}"
        )


class RefundPaymentUseCase:
    def __init__(self, payment_repository: PaymentRepository):
        self._payment_repository = payment_repository

    async def execute(self, request: RefundRequest) -> RefundResult:
        payment = await load_payment(self._payment_repository, request.transaction_id)
        if payment.status != PaymentStatus.COMPLETED:
            raise PaymentNotRefundableError(payment.transaction_id)

        amount = request.amount or payment.amount
        if amount > payment.net_payment_amount:
            raise RefundExceedsNetAmountError(amount, payment.net_payment_amount)

        refund = payment.initiate_refund(amount, request.reason, request.initiated_by)
        refund.refund_id = f"ref_{random_token(14)}"
        payment.complete_refund(refund, gateway_refund_id=refund.refund_id)
        payment = await self._payment_repository.save(payment)
        logger.info(
            f"Refund processed: transaction_id={payment.transaction_id} "
            f"amount={amount} status={payment.status}"
        )
        return RefundResult(payment=payment, refund=refund)
