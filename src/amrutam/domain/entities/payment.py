"""Payment domain entity: a simulated gateway transaction with refunds."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ...core.utils.datetime_utils import utc_now
from ..enums.payment import PaymentStatus, RefundStatus, SettlementStatus
from ..errors import InvalidEntityDataError

DEFAULT_COMMISSION_PERCENTAGE = 15


@dataclass
class Taxes:
    gst: float = 0
    cgst: float = 0
    sgst: float = 0
    igst: float = 0


@dataclass
class CardDetails:
    last4_digits: Optional[str] = None
    card_type: Optional[str] = None
    bank: Optional[str] = None


@dataclass
class UpiDetails:
    vpa: Optional[str] = None
    upi_transaction_id: Optional[str] = None


@dataclass
class BillingAddress:
    name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    country: str = "India"


@dataclass
class Refund:
    amount: float
    reason: Optional[str] = None
    initiated_by: str = "admin"
    status: str = RefundStatus.INITIATED.value
    refund_id: Optional[str] = None
    processed_at: Optional[datetime] = None
    gateway_refund_id: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)


@dataclass
class DoctorEarning:
    gross_amount: Optional[float] = None
    platform_commission: Optional[float] = None
    net_amount: Optional[float] = None
    commission_percentage: Optional[float] = None


@dataclass
class Payment:
    transaction_id: str
    doctor_id: str
    patient_email: str
    patient_name: str
    service_type: str
    service_id: str
    service_model: str
    amount: float
    consultation_fee: float
    payment_method: str
    payment_provider: str
    id: Optional[str] = None
    order_id: Optional[str] = None
    currency: str = "INR"
    platform_fee: float = 0
    processing_fee: float = 0
    taxes: Taxes = field(default_factory=Taxes)
    discount_amount: float = 0
    card_details: Optional[CardDetails] = None
    upi_details: Optional[UpiDetails] = None
    status: str = PaymentStatus.PENDING.value
    payment_date: Optional[datetime] = None
    gateway_response: Dict[str, Any] = field(default_factory=dict)
    refunds: List[Refund] = field(default_factory=list)
    doctor_earning: DoctorEarning = field(default_factory=DoctorEarning)
    settlement_status: str = SettlementStatus.PENDING.value
    settlement_date: Optional[datetime] = None
    settlement_id: Optional[str] = None
    billing_address: Optional[BillingAddress] = None
    invoice_number: Optional[str] = None
    invoice_url: Optional[str] = None
    reconciled: bool = False
    reconciled_at: Optional[datetime] = None
    notes: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        self.patient_email = (self.patient_email or "").strip().lower()
        for name in ("amount", "consultation_fee", "platform_fee", "processing_fee", "discount_amount"):
            if getattr(self, name) < 0:
                raise InvalidEntityDataError(name, "cannot be negative")

    @property
    def total_refunded_amount(self) -> float:
        return sum(r.amount for r in self.refunds if r.status == RefundStatus.COMPLETED)

    @property
    def net_payment_amount(self) -> float:
        return self.amount - self.total_refunded_amount

    def apply_commission(self, commission_percentage: Optional[float] = None) -> DoctorEarning:
        """Split the consultation fee into platform commission and doctor net.

        Leaves an already computed split untouched.
        """
        if not self.doctor_earning.gross_amount and self.consultation_fee:
            percentage = (
                self.doctor_earning.commission_percentage
                or commission_percentage
                or DEFAULT_COMMISSION_PERCENTAGE
            )
            gross = self.consultation_fee
            commission = gross * percentage / 100
            self.doctor_earning = DoctorEarning(
                gross_amount=gross,
                platform_commission=commission,
                net_amount=gross - commission,
                commission_percentage=percentage,
            )
        return self.doctor_earning

    def mark_status(self, status: str, now: Optional[datetime] = None) -> None:
        now = now or utc_now()
        self.status = status
        if status == PaymentStatus.COMPLETED and not self.payment_date:
            self.payment_date = now
        self.updated_at = now

    def initiate_refund(self, amount: float, reason: Optional[str], initiated_by: str) -> Refund:
        refund = Refund(amount=amount, reason=reason, initiated_by=initiated_by)
        self.refunds.append(refund)
        self.updated_at = refund.created_at
        return refund

    def complete_refund(self, refund: Refund, gateway_refund_id: str, now: Optional[datetime] = None) -> None:
        now = now or utc_now()
        refund.status = RefundStatus.COMPLETED.value
        refund.processed_at = now
        refund.gateway_refund_id = gateway_refund_id
        refunded = self.total_refunded_amount
        if refunded >= self.amount:
            self.status = PaymentStatus.REFUNDED.value
        elif refunded > 0:
            self.status = PaymentStatus.PARTIALLY_REFUNDED.value
        self.updated_at = now
