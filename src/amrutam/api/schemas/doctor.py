"""
Doctor-related API schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from ...application.dto.doctor_dto import DoctorProfileUpdate, LoginRequest, RegisterDoctorRequest
from ...core.utils.string_utils import HHMM_PATTERN, PHONE_PATTERN
from ...domain.entities.doctor import BankDetails, ClinicAddress, DayAvailability, TimeSlot
from ...domain.enums.doctor import Language, Specialization, Weekday
from .common import CamelModel, Pagination


class ClinicAddressSchema(CamelModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    country: str = "India"

    def to_domain(self) -> ClinicAddress:
        return ClinicAddress(**self.model_dump())


class TimeSlotSchema(CamelModel):
    start_time: str = Field(..., pattern=HHMM_PATTERN.pattern)
    end_time: str = Field(..., pattern=HHMM_PATTERN.pattern)
    is_available: bool = True


class DayAvailabilitySchema(CamelModel):
    day: Weekday
    time_slots: List[TimeSlotSchema] = Field(default_factory=list)

    def to_domain(self) -> DayAvailability:
        return DayAvailability(
            day=self.day,
            time_slots=[TimeSlot(**slot.model_dump()) for slot in self.time_slots],
        )


class BankDetailsSchema(CamelModel):
    account_number: Optional[str] = None
    ifsc_code: Optional[str] = None
    bank_name: Optional[str] = None
    account_holder_name: Optional[str] = None

    def to_domain(self) -> BankDetails:
        return BankDetails(**self.model_dump())


class RegisterDoctorSchema(CamelModel):
    full_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(..., pattern=PHONE_PATTERN.pattern)
    password: str = Field(..., min_length=6, max_length=72)
    medical_license_number: str = Field(..., min_length=1)
    specialization: Specialization
    experience: int = Field(..., ge=0)
    qualification: str = Field(..., min_length=1)
    consultation_fee: float = Field(..., ge=0)
    registration_body: Optional[str] = None
    clinic_name: Optional[str] = None
    clinic_address: Optional[ClinicAddressSchema] = None
    languages: Optional[List[Language]] = None
    bio: Optional[str] = Field(None, max_length=500)

    def to_domain(self) -> RegisterDoctorRequest:
        return RegisterDoctorRequest(
            full_name=self.full_name,
            email=str(self.email),
            phone=self.phone,
            password=self.password,
            medical_license_number=self.medical_license_number,
            specialization=self.specialization,
            experience=self.experience,
            qualification=self.qualification,
            consultation_fee=self.consultation_fee,
            registration_body=self.registration_body,
            clinic_name=self.clinic_name,
            clinic_address=self.clinic_address.to_domain() if self.clinic_address else None,
            languages=list(self.languages) if self.languages else None,
            bio=self.bio,
        )


class LoginSchema(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    def to_domain(self) -> LoginRequest:
        return LoginRequest(email=str(self.email), password=self.password)


class UpdateDoctorProfileSchema(CamelModel):
    """Editable profile fields; omitted fields are left as they are."""

    full_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN.pattern)
    qualification: Optional[str] = Field(None, min_length=1)
    experience: Optional[int] = Field(None, ge=0)
    registration_body: Optional[str] = None
    clinic_name: Optional[str] = None
    clinic_address: Optional[ClinicAddressSchema] = None
    consultation_fee: Optional[float] = Field(None, ge=0)
    languages: Optional[List[Language]] = None
    availability: Optional[List[DayAvailabilitySchema]] = None
    profile_photo: Optional[str] = None
    bio: Optional[str] = Field(None, max_length=500)
    bank_details: Optional[BankDetailsSchema] = None

    def to_domain(self) -> DoctorProfileUpdate:
        return DoctorProfileUpdate(
            full_name=self.full_name,
            phone=self.phone,
            qualification=self.qualification,
            experience=self.experience,
            registration_body=self.registration_body,
            clinic_name=self.clinic_name,
            clinic_address=self.clinic_address.to_domain() if self.clinic_address else None,
            consultation_fee=self.consultation_fee,
            languages=list(self.languages) if self.languages is not None else None,
            availability=(
                [day.to_domain() for day in self.availability] if self.availability is not None else None
            ),
            profile_photo=self.profile_photo,
            bio=self.bio,
            bank_details=self.bank_details.to_domain() if self.bank_details else None,
        )


class DoctorSummarySchema(CamelModel):
    id: str
    full_name: str
    email: str
    specialization: str
    is_verified: bool
    profile_complete: bool


class AuthData(CamelModel):
    doctor: DoctorSummarySchema
    token: str


class DoctorPublicSchema(CamelModel):
    """Directory view of a doctor; credentials and finances are never included."""

    id: str
    full_name: str
    email: str
    phone: str
    medical_license_number: str
    registration_body: Optional[str] = None
    specialization: str
    experience: int
    qualification: str
    clinic_name: Optional[str] = None
    clinic_address: ClinicAddressSchema
    consultation_fee: float
    languages: List[str]
    is_verified: bool
    is_active: bool
    profile_complete: bool
    availability: List[DayAvailabilitySchema]
    profile_photo: Optional[str] = None
    bio: Optional[str] = None
    total_consultations: int
    rating: float
    review_count: int
    joined_at: datetime


class DoctorProfileSchema(DoctorPublicSchema):
    """A doctor's own profile, including earnings and payout details."""

    total_earnings: float
    pending_withdrawal: float
    bank_details: Optional[BankDetailsSchema] = None
    last_login_at: Optional[datetime] = None
    updated_at: datetime


class DoctorData(CamelModel):
    doctor: DoctorPublicSchema


class DoctorProfileData(CamelModel):
    doctor: DoctorProfileSchema


class DoctorListData(CamelModel):
    doctors: List[DoctorPublicSchema]
    pagination: Pagination


class DoctorSearchData(DoctorListData):
    query: str


class DoctorStatsSchema(CamelModel):
    total_doctors: int
    verified_doctors: int
    average_experience: float
    average_rating: float
    total_consultations: int
    specializations: List[str]


class DoctorStatsData(CamelModel):
    summary: DoctorStatsSchema
