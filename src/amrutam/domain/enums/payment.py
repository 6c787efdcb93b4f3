"""
Payment, refund and settlement enums.
"""

from enum import Enum


class ServiceType(str, Enum):
    CONSULTATION = "consultation"
    APPOINTMENT = "appointment"
    PRESCRIPTION = "prescription"
    FOLLOW_UP = "follow-up"
    SUBSCRIPTION = "subscription"


class ServiceModel(str, Enum):
    """Collection a payment's service id points into."""
    CONSULTATION = "Consultation"
    APPOINTMENT = "Appointment"


class Currency(str, Enum):
    INR = "INR"
    USD = "USD"
    EUR = "EUR"


class PaymentMethod(str, Enum):
    CARD = "card"
    UPI = "upi"
    NETBANKING = "netbanking"
    WALLET = "wallet"
    CASH = "cash"
    BANK_TRANSFER = "bank-transfer"


class PaymentProvider(str, Enum):
    RAZORPAY = "razorpay"
    PAYTM = "paytm"
    PHONEPE = "phonepe"
    GPAY = "gpay"
    STRIPE = "stripe"
    PAYPAL = "paypal"
    MANUAL = "manual"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
    PARTIALLY_REFUNDED = "partially-refunded"


class RefundReason(str, Enum):
    CANCELLATION = "cancellation"
    TECHNICAL_ISSUE = "technical-issue"
    DOCTOR_UNAVAILABLE = "doctor-unavailable"
    PATIENT_REQUEST = "patient-request"
    QUALITY_ISSUE = "quality-issue"
    OTHER = "other"


class RefundStatus(str, Enum):
    INITIATED = "initiated"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class RefundInitiator(str, Enum):
    PATIENT = "patient"
    DOCTOR = "doctor"
    ADMIN = "admin"
    SYSTEM = "system"


class SettlementStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SETTLED = "settled"
    HOLD = "hold"
    FAILED = "failed"


class EarningsPeriod(str, Enum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
