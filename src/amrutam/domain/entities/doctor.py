"""Doctor domain entity: a practitioner listed in the directory."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from ...core.utils.datetime_utils import utc_now
from ...core.utils.string_utils import validate_phone_number
from ..enums.doctor import DEFAULT_LANGUAGES
from ..errors import InsufficientBalanceError, InvalidEntityDataError


@dataclass
class ClinicAddress:
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    country: str = "India"


@dataclass
class TimeSlot:
    start_time: str
    end_time: str
    is_available: bool = True


@dataclass
class DayAvailability:
    day: str
    time_slots: List[TimeSlot] = field(default_factory=list)


@dataclass
class BankDetails:
    account_number: Optional[str] = None
    ifsc_code: Optional[str] = None
    bank_name: Optional[str] = None
    account_holder_name: Optional[str] = None


@dataclass
class Doctor:
    """Doctor domain entity.

    Validation is kept light here; field formats and enums are checked at the
    API boundary. The invariants held here are the ones every write path
    relies on: a lower-cased email, a well-formed phone and non-negative
    counters.
    """

    full_name: str
    email: str
    phone: str
    password_hash: str
    medical_license_number: str
    specialization: str
    experience: int
    qualification: str
    consultation_fee: float
    id: Optional[str] = None
    registration_body: Optional[str] = None
    clinic_name: Optional[str] = None
    clinic_address: ClinicAddress = field(default_factory=ClinicAddress)
    languages: List[str] = field(default_factory=lambda: [lang.value for lang in DEFAULT_LANGUAGES])
    is_verified: bool = False
    is_active: bool = True
    profile_complete: bool = False
    availability: List[DayAvailability] = field(default_factory=list)
    profile_photo: Optional[str] = None
    bio: Optional[str] = None
    total_earnings: float = 0
    pending_withdrawal: float = 0
    bank_details: Optional[BankDetails] = None
    total_consultations: int = 0
    rating: float = 0
    review_count: int = 0
    joined_at: datetime = field(default_factory=utc_now)
    last_login_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Normalize the email and check field invariants."""
        self.email = (self.email or "").strip().lower()
        if not self.full_name or not self.full_name.strip():
            raise InvalidEntityDataError("full_name", "must not be empty")
        if len(self.full_name) > 100:
            raise InvalidEntityDataError("full_name", "cannot exceed 100 characters")
        if not self.email:
            raise InvalidEntityDataError("email", "must not be empty")
        if not validate_phone_number(self.phone):
            raise InvalidEntityDataError("phone", "must be 10-15 digits with optional leading +")
        if self.experience < 0:
            raise InvalidEntityDataError("experience", "cannot be negative")
        if self.consultation_fee < 0:
            raise InvalidEntityDataError("consultation_fee", "cannot be negative")
        if not 0 <= self.rating <= 5:
            raise InvalidEntityDataError("rating", "must be between 0 and 5")
        if self.bio and len(self.bio) > 500:
            raise InvalidEntityDataError("bio", "cannot exceed 500 characters")

    def check_profile_complete(self) -> bool:
        """Recompute and store whether the profile carries every required field."""
        required = [
            self.full_name,
            self.email,
            self.phone,
            self.medical_license_number,
            self.specialization,
            self.experience,
            self.qualification,
            self.consultation_fee,
        ]
        self.profile_complete = all(bool(value) for value in required)
        return self.profile_complete

    @property
    def is_bookable(self) -> bool:
        """Only active, verified doctors accept appointments and consultations."""
        return self.is_active and self.is_verified

    def credit_earnings(self, amount: float) -> None:
        """Add a completed payment's net amount to the doctor's balances."""
        self.total_earnings += amount
        self.pending_withdrawal += amount
        self.updated_at = utc_now()

    def withdraw(self, amount: float) -> float:
        """Settle ``amount`` out of the pending balance and return what remains."""
        if amount > self.pending_withdrawal:
            raise InsufficientBalanceError(amount, self.pending_withdrawal)
        self.pending_withdrawal -= amount
        self.updated_at = utc_now()
        return self.pending_withdrawal

    def record_login(self) -> None:
        self.last_login_at = utc_now()

    def record_completed_consultation(self) -> None:
        self.total_consultations += 1
        self.updated_at = utc_now()

    def slots_for(self, day: str) -> List[TimeSlot]:
        """Configured time slots for a weekday name."""
        for entry in self.availability:
            if entry.day == day:
                return list(entry.time_slots)
        return []
