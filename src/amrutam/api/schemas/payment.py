"""
Payment, refund and earnings API schemas.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import EmailStr, Field

from ...application.dto.payment_dto import (
    CompletePaymentRequest,
    InitiatePaymentRequest,
    RefundRequest,
    WithdrawalRequest,
)
from ...application.utils.billing import FeeBreakdown
from ...domain.entities.payment import BillingAddress
from ...domain.enums.payment import PaymentMethod, PaymentStatus, RefundInitiator, RefundReason, ServiceType
from .common import CamelModel, Pagination
from .doctor import BankDetailsSchema


class BillingAddressSchema(CamelModel):
    name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    country: str = "India"


class InitiatePaymentSchema(CamelModel):
    doctor_id: str = Field(..., min_length=1)
    patient_email: EmailStr
    patient_name: str = Field(..., min_length=1, max_length=100)
    service_type: ServiceType
    service_id: str = Field(..., min_length=1)
    payment_method: PaymentMethod = PaymentMethod.CARD
    billing_address: Optional[BillingAddressSchema] = None

    def to_domain(self) -> InitiatePaymentRequest:
        return InitiatePaymentRequest(
            doctor_id=self.doctor_id,
            patient_email=str(self.patient_email),
            patient_name=self.patient_name,
            service_type=self.service_type,
            service_id=self.service_id,
            payment_method=self.payment_method,
            billing_address=BillingAddress(**self.billing_address.model_dump()) if self.billing_address else None,
        )


class CompletePaymentSchema(CamelModel):
    transaction_id: str = Field(..., min_length=1)
    payment_id: Optional[str] = None
    signature: Optional[str] = None
    status: PaymentStatus = PaymentStatus.COMPLETED

    def to_domain(self) -> CompletePaymentRequest:
        return CompletePaymentRequest(**self.model_dump())


class RefundSchema(CamelModel):
    amount: Optional[float] = Field(None, gt=0)
    reason: Optional[RefundReason] = None
    initiated_by: RefundInitiator = RefundInitiator.ADMIN

    def to_domain(self, transaction_id: str) -> RefundRequest:
        return RefundRequest(transaction_id=transaction_id, **self.model_dump())


class WithdrawSchema(CamelModel):
    amount: float
    bank_details: Optional[BankDetailsSchema] = None

    def to_domain(self, doctor_id: str) -> WithdrawalRequest:
        return WithdrawalRequest(
            doctor_id=doctor_id,
            amount=self.amount,
            bank_details=self.bank_details.to_domain() if self.bank_details else None,
        )


class TaxesSchema(CamelModel):
    gst: float = 0
    cgst: float = 0
    sgst: float = 0
    igst: float = 0


class RefundEntrySchema(CamelModel):
    refund_id: Optional[str] = None
    amount: float
    reason: Optional[str] = None
    status: str
    initiated_by: str
    processed_at: Optional[datetime] = None
    gateway_refund_id: Optional[str] = None
    created_at: datetime


class DoctorEarningSchema(CamelModel):
    gross_amount: Optional[float] = None
    platform_commission: Optional[float] = None
    net_amount: Optional[float] = None
    commission_percentage: Optional[float] = None


class PaymentSchema(CamelModel):
    id: str
    transaction_id: str
    order_id: Optional[str] = None
    doctor_id: str
    patient_email: str
    patient_name: str
    service_type: str
    service_id: str
    service_model: str
    amount: float
    currency: str
    consultation_fee: float
    platform_fee: float
    processing_fee: float
    taxes: TaxesSchema
    discount_amount: float
    payment_method: str
    payment_provider: str
    status: str
    payment_date: Optional[datetime] = None
    gateway_response: Dict[str, Any] = Field(default_factory=dict)
    refunds: List[RefundEntrySchema] = Field(default_factory=list)
    total_refunded_amount: float
    net_payment_amount: float
    doctor_earning: DoctorEarningSchema
    settlement_status: str
    settlement_date: Optional[datetime] = None
    billing_address: Optional[BillingAddressSchema] = None
    invoice_number: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PaymentHeadSchema(CamelModel):
    transaction_id: str
    order_id: Optional[str] = None
    amount: float
    currency: str
    status: str


class GatewayResponseSchema(CamelModel):
    payment_id: str
    order_id: Optional[str] = None
    status: str
    amount: float
    currency: str
    description: str
    notes: Dict[str, Any] = Field(default_factory=dict)


class FeeBreakdownSchema(CamelModel):
    consultation_fee: float
    platform_fee: float
    processing_fee: float
    taxes: float
    total_amount: float

    @classmethod
    def from_breakdown(cls, breakdown: FeeBreakdown) -> "FeeBreakdownSchema":
        return cls(
            consultation_fee=breakdown.consultation_fee,
            platform_fee=breakdown.platform_fee,
            processing_fee=breakdown.processing_fee,
            taxes=breakdown.gst,
            total_amount=breakdown.total_amount,
        )


class InitiatePaymentData(CamelModel):
    payment: PaymentHeadSchema
    gateway_response: GatewayResponseSchema
    breakdown: FeeBreakdownSchema


class PaymentData(CamelModel):
    payment: PaymentSchema


class PaymentListData(CamelModel):
    payments: List[PaymentSchema]
    pagination: Pagination


class RefundSummarySchema(CamelModel):
    amount: float
    refund_id: Optional[str] = None
    status: str
    reason: Optional[str] = None


class RefundData(CamelModel):
    refund: RefundSummarySchema
    payment: PaymentSchema


class PeriodSchema(CamelModel):
    start: datetime
    end: datetime


class EarningsSummarySchema(CamelModel):
    total_gross_earnings: float
    total_platform_commission: float
    total_net_earnings: float
    total_transactions: int
    average_transaction_value: float
    pending_settlement: float


class EarningsData(CamelModel):
    doctor_id: str
    period: PeriodSchema
    summary: EarningsSummarySchema


class WithdrawalData(CamelModel):
    withdrawal_id: str
    amount: float
    status: str
    processed_at: datetime
    remaining_balance: float
