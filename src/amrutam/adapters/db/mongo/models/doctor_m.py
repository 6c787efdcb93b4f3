"""MongoDB Beanie model for Doctor documents."""

from datetime import datetime
from typing import List, Optional

import pymongo
from beanie import Document, Indexed
from pydantic import BaseModel, Field

from amrutam.core.utils.datetime_utils import utc_now


class ClinicAddressMongo(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    country: str = "India"


class TimeSlotMongo(BaseModel):
    start_time: str
    end_time: str
    is_available: bool = True


class DayAvailabilityMongo(BaseModel):
    day: str
    time_slots: List[TimeSlotMongo] = Field(default_factory=list)


class BankDetailsMongo(BaseModel):
    account_number: Optional[str] = None
    ifsc_code: Optional[str] = None
    bank_name: Optional[str] = None
    account_holder_name: Optional[str] = None


class DoctorMongo(Document):
    """MongoDB model for Doctor entity."""

    full_name: str = Field(..., description="Doctor display name")
    email: Indexed(str, unique=True) = Field(..., description="Login email (lower-case)")
    phone: str = Field(..., description="Contact phone number")
    password: str = Field(..., description="bcrypt password hash")
    medical_license_number: Indexed(str, unique=True) = Field(..., description="Medical license number")
    registration_body: Optional[str] = None
    specialization: str = Field(..., description="Ayurvedic specialization")
    experience: int = Field(..., ge=0, description="Years of practice")
    qualification: str = Field(..., description="Highest qualification")
    clinic_name: Optional[str] = None
    clinic_address: ClinicAddressMongo = Field(default_factory=ClinicAddressMongo)
    consultation_fee: float = Field(..., ge=0)
    languages: List[str] = Field(default_factory=list)
    is_verified: bool = Field(default=False)
    is_active: bool = Field(default=True)
    profile_complete: bool = Field(default=False)
    availability: List[DayAvailabilityMongo] = Field(default_factory=list)
    profile_photo: Optional[str] = None
    bio: Optional[str] = None
    total_earnings: float = Field(default=0)
    pending_withdrawal: float = Field(default=0)
    bank_details: Optional[BankDetailsMongo] = None
    total_consultations: int = Field(default=0)
    rating: float = Field(default=0, ge=0, le=5)
    review_count: int = Field(default=0)
    joined_at: datetime = Field(default_factory=utc_now)
    last_login_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    class Settings:
        name = "doctors"
        indexes = [
            "specialization",
            "clinic_address.city",
            [("is_verified", pymongo.ASCENDING), ("is_active", pymongo.ASCENDING)],
            [("rating", pymongo.DESCENDING)],
        ]
