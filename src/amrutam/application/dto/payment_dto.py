"""Payment DTOs for use case communication."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from ...domain.entities.doctor import BankDetails
from ...domain.entities.payment import BillingAddress, Payment, Refund
from ..utils.billing import FeeBreakdown
from .queries import EarningsSummary


@dataclass
class InitiatePaymentRequest:
    doctor_id: str
    patient_email: str
    patient_name: str
    service_type: str
    service_id: str
    payment_method: str = "card"
    billing_address: Optional[BillingAddress] = None


@dataclass
class InitiatePaymentResult:
    payment: Payment
    gateway_response: Dict[str, Any]
    breakdown: FeeBreakdown


@dataclass
class CompletePaymentRequest:
    transaction_id: str
    payment_id: Optional[str] = None
    signature: Optional[str] = None
    status: str = "completed"


@dataclass
class RefundRequest:
    transaction_id: str
    amount: Optional[float] = None
    reason: Optional[str] = None
    initiated_by: str = "admin"


@dataclass
class RefundResult:
    payment: Payment
    refund: Refund


@dataclass
class EarningsReport:
    doctor_id: str
    start: datetime
    end: datetime
    summary: EarningsSummary


@dataclass
class WithdrawalRequest:
    doctor_id: str
    amount: float
    bank_details: Optional[BankDetails] = None


@dataclass
class WithdrawalResult:
    withdrawal_id: str
    amount: float
    status: str
    processed_at: datetime
    remaining_balance: float
