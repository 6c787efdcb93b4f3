"""
Domain-specific error types for business rule violations.

Each error carries the HTTP status the API layer answers with.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base domain error."""

    http_status = 400

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class EntityNotFoundError(DomainError):
    """Base for lookups that found nothing."""

    http_status = 404


class InvalidEntityDataError(DomainError):
    """Entity field failed validation."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(
            f"Invalid value for {field}: {reason}",
            "INVALID_ENTITY_DATA",
            {"field": field},
        )


class InvalidStatusError(DomainError):
    def __init__(self, status: str) -> None:
        super().__init__("Invalid status", "INVALID_STATUS", {"status": status})


# Doctors

class DoctorNotFoundError(EntityNotFoundError):
    def __init__(self, doctor_id: str) -> None:
        super().__init__("Doctor not found", "DOCTOR_NOT_FOUND", {"doctor_id": doctor_id})


class DuplicateDoctorError(DomainError):
    """Email or medical license number already registered."""

    def __init__(self, email: str, license_number: str) -> None:
        super().__init__(
            "Doctor with this email or license number already exists",
            "DUPLICATE_DOCTOR",
            {"email": email, "medical_license_number": license_number},
        )


class InvalidCredentialsError(DomainError):
    http_status = 401

    def __init__(self) -> None:
        super().__init__("Invalid email or password", "INVALID_CREDENTIALS")


class DoctorUnavailableError(DomainError):
    """Doctor is missing, inactive or not yet verified."""

    def __init__(self, doctor_id: str) -> None:
        super().__init__(
            "Doctor not found or not available",
            "DOCTOR_UNAVAILABLE",
            {"doctor_id": doctor_id},
        )


class InsufficientBalanceError(DomainError):
    def __init__(self, requested: float, available: float) -> None:
        super().__init__(
            "Withdrawal amount exceeds pending balance",
            "INSUFFICIENT_BALANCE",
            {"requested": requested, "available": available},
        )


# Appointments

class AppointmentNotFoundError(EntityNotFoundError):
    def __init__(self, appointment_id: str) -> None:
        super().__init__(
            "Appointment not found", "APPOINTMENT_NOT_FOUND", {"appointment_id": appointment_id}
        )


class SlotAlreadyBookedError(DomainError):
    def __init__(self, message: str = "This time slot is already booked") -> None:
        super().__init__(message, "SLOT_ALREADY_BOOKED")


class AppointmentNotCancellableError(DomainError):
    def __init__(self, appointment_id: str) -> None:
        super().__init__(
            "Appointment cannot be cancelled (too close to appointment time)",
            "APPOINTMENT_NOT_CANCELLABLE",
            {"appointment_id": appointment_id},
        )


class AppointmentNotReschedulableError(DomainError):
    def __init__(self, appointment_id: str) -> None:
        super().__init__(
            "Appointment cannot be rescheduled (too close to appointment time "
            "or maximum reschedules reached)",
            "APPOINTMENT_NOT_RESCHEDULABLE",
            {"appointment_id": appointment_id},
        )


# Consultations

class ConsultationNotFoundError(EntityNotFoundError):
    def __init__(self, consultation_id: str) -> None:
        super().__init__(
            "Consultation not found", "CONSULTATION_NOT_FOUND", {"consultation_id": consultation_id}
        )


# Contact

class ContactNotFoundError(EntityNotFoundError):
    def __init__(self, contact_id: str) -> None:
        super().__init__(
            "Contact inquiry not found", "CONTACT_NOT_FOUND", {"contact_id": contact_id}
        )


# Payments

class PaymentNotFoundError(EntityNotFoundError):
    def __init__(self, transaction_id: str) -> None:
        super().__init__(
            "Payment not found", "PAYMENT_NOT_FOUND", {"transaction_id": transaction_id}
        )


class ServiceNotFoundError(EntityNotFoundError):
    """The consultation or appointment a payment refers to does not exist."""

    def __init__(self, service_type: str, service_id: str) -> None:
        super().__init__(
            "Service not found",
            "SERVICE_NOT_FOUND",
            {"service_type": service_type, "service_id": service_id},
        )


class PaymentNotRefundableError(DomainError):
    def __init__(self, transaction_id: str) -> None:
        super().__init__(
            "Cannot refund a payment that is not completed",
            "PAYMENT_NOT_REFUNDABLE",
            {"transaction_id": transaction_id},
        )


class RefundExceedsNetAmountError(DomainError):
    def __init__(self, requested: float, available: float) -> None:
        super().__init__(
            "Refund amount cannot exceed the net payment amount",
            "REFUND_EXCEEDS_NET_AMOUNT",
            {"requested": requested, "available": available},
        )


class PaymentAlreadyRefundedError(DomainError):
    def __init__(self, transaction_id: str, status: str) -> None:
        super().__init__(
            "Cannot update a payment that has been refunded",
            "PAYMENT_ALREADY_REFUNDED",
            {"transaction_id": transaction_id, "status": status},
        )
