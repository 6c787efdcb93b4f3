"""Doctor DTOs for use case communication."""

from dataclasses import dataclass
from typing import List, Optional

from ...domain.entities.doctor import BankDetails, ClinicAddress, DayAvailability, Doctor


@dataclass
class RegisterDoctorRequest:
    """Request DTO for doctor registration."""

    full_name: str
    email: str
    phone: str
    password: str
    medical_license_number: str
    specialization: str
    experience: int
    qualification: str
    consultation_fee: float
    registration_body: Optional[str] = None
    clinic_name: Optional[str] = None
    clinic_address: Optional[ClinicAddress] = None
    languages: Optional[List[str]] = None
    bio: Optional[str] = None


@dataclass
class LoginRequest:
    email: str
    password: str


@dataclass
class DoctorAuthResult:
    """Doctor plus the bearer token issued for it."""

    doctor: Doctor
    token: str


@dataclass
class DoctorProfileUpdate:
    """Fields a doctor may edit on their own profile; None leaves a field untouched."""

    full_name: Optional[str] = None
    phone: Optional[str] = None
    qualification: Optional[str] = None
    experience: Optional[int] = None
    registration_body: Optional[str] = None
    clinic_name: Optional[str] = None
    clinic_address: Optional[ClinicAddress] = None
    consultation_fee: Optional[float] = None
    languages: Optional[List[str]] = None
    availability: Optional[List[DayAvailability]] = None
    profile_photo: Optional[str] = None
    bio: Optional[str] = None
    bank_details: Optional[BankDetails] = None
