"""
Appointment and consultation enums.
"""

from enum import Enum


class AppointmentType(str, Enum):
    CONSULTATION = "consultation"
    FOLLOW_UP = "follow-up"
    EMERGENCY = "emergency"
    ROUTINE_CHECKUP = "routine-checkup"


class ConsultationMode(str, Enum):
    """How an appointment is held."""
    VIDEO = "video"
    AUDIO = "audio"
    CHAT = "chat"
    IN_PERSON = "in-person"


class UrgencyLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    EMERGENCY = "emergency"


class AppointmentStatus(str, Enum):
    """Appointment lifecycle: scheduled -> confirmed -> in-progress -> completed."""
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"
    RESCHEDULED = "rescheduled"


# Statuses that can still be cancelled, rescheduled or listed as upcoming
ACTIVE_APPOINTMENT_STATUSES = (
    AppointmentStatus.SCHEDULED,
    AppointmentStatus.CONFIRMED,
    AppointmentStatus.RESCHEDULED,
)


class ConfirmationStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED_BY_DOCTOR = "confirmed-by-doctor"
    CONFIRMED_BY_PATIENT = "confirmed-by-patient"
    AUTO_CONFIRMED = "auto-confirmed"


class BookedBy(str, Enum):
    PATIENT = "patient"
    DOCTOR = "doctor"
    ADMIN = "admin"


class ServicePaymentStatus(str, Enum):
    """Payment state recorded on an appointment or consultation."""
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"
    WAIVED = "waived"


class ConsultationType(str, Enum):
    VIDEO = "video"
    AUDIO = "audio"
    CHAT = "chat"
    PHONE = "phone"


class ConsultationStatus(str, Enum):
    """Consultation lifecycle: scheduled -> in-progress -> completed."""
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"


class ConsultationSort(str, Enum):
    DATE_ASC = "date-asc"
    DATE_DESC = "date-desc"
    STATUS = "status"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class Dosha(str, Enum):
    """Ayurvedic constitution (prakriti) or imbalance (vikriti)."""
    VATA = "Vata"
    PITTA = "Pitta"
    KAPHA = "Kapha"
    VATA_PITTA = "Vata-Pitta"
    VATA_KAPHA = "Vata-Kapha"
    PITTA_KAPHA = "Pitta-Kapha"
    TRIDOSHA = "Tridosha"


# Modes that get a generated meeting room
REMOTE_MODES = ("video", "audio")
