"""
MongoDB implementation of DoctorRepository.
"""

from dataclasses import asdict
from typing import List, Optional, Sequence, Tuple

import pymongo
from pymongo.errors import DuplicateKeyError

from amrutam.application.dto.queries import DoctorDirectoryQuery, DoctorStats
from amrutam.application.ports.repositories.doctor_repo import DoctorRepository
from amrutam.core.utils.string_utils import contains_pattern
from amrutam.domain.entities.doctor import (
    BankDetails,
    ClinicAddress,
    DayAvailability,
    Doctor,
    TimeSlot,
)
from amrutam.domain.enums.doctor import DoctorSort
from amrutam.domain.errors import DuplicateDoctorError
from ..ids import to_object_id, to_str_id
from ..models.doctor_m import (
    BankDetailsMongo,
    ClinicAddressMongo,
    DayAvailabilityMongo,
    DoctorMongo,
)

LISTED_FILTER = {"is_verified": True, "is_active": True}

SORT_ORDERS = {
    DoctorSort.RATING.value: [("rating", pymongo.DESCENDING), ("review_count", pymongo.DESCENDING)],
    DoctorSort.EXPERIENCE.value: [("experience", pymongo.DESCENDING)],
    DoctorSort.FEE_LOW.value: [("consultation_fee", pymongo.ASCENDING)],
    DoctorSort.FEE_HIGH.value: [("consultation_fee", pymongo.DESCENDING)],
}
DEFAULT_SORT = [("rating", pymongo.DESCENDING)]


class MongoDoctorRepository(DoctorRepository):
    """MongoDB implementation of DoctorRepository."""

    async def save(self, doctor: Doctor) -> Doctor:
        """Save a doctor to MongoDB."""
        doctor_mongo = self._domain_to_mongo(doctor)
        try:
            if doctor_mongo.id is None:
                await doctor_mongo.insert()
            else:
                await doctor_mongo.save()
        except DuplicateKeyError:
            raise DuplicateDoctorError(doctor.email, doctor.medical_license_number)
        return self._mongo_to_domain(doctor_mongo)

    async def find_by_id(self, doctor_id: str) -> Optional[Doctor]:
        object_id = to_object_id(doctor_id)
        if object_id is None:
            return None
        doctor_mongo = await DoctorMongo.get(object_id)
        return self._mongo_to_domain(doctor_mongo) if doctor_mongo else None

    async def find_by_ids(self, doctor_ids: Sequence[str]) -> List[Doctor]:
        object_ids = [oid for oid in (to_object_id(i) for i in doctor_ids) if oid is not None]
        if not object_ids:
            return []
        docs = await DoctorMongo.find({"_id": {"$in": object_ids}}).to_list()
        return [self._mongo_to_domain(doc) for doc in docs]

    async def find_by_email(self, email: str) -> Optional[Doctor]:
        doctor_mongo = await DoctorMongo.find_one(DoctorMongo.email == email.strip().lower())
        return self._mongo_to_domain(doctor_mongo) if doctor_mongo else None

    async def find_by_email_or_license(self, email: str, license_number: str) -> Optional[Doctor]:
        doctor_mongo = await DoctorMongo.find_one(
            {"$or": [{"email": email.strip().lower()}, {"medical_license_number": license_number}]}
        )
        return self._mongo_to_domain(doctor_mongo) if doctor_mongo else None

    async def find_listed(self, query: DoctorDirectoryQuery) -> Tuple[List[Doctor], int]:
        filters = dict(LISTED_FILTER)
        if query.specialization:
            filters["specialization"] = query.specialization
        if query.city:
            filters["clinic_address.city"] = {"$regex": contains_pattern(query.city).pattern, "$options": "i"}
        if query.min_fee is not None or query.max_fee is not None:
            fee_range = {}
            if query.min_fee is not None:
                fee_range["$gte"] = query.min_fee
            if query.max_fee is not None:
                fee_range["$lte"] = query.max_fee
            filters["consultation_fee"] = fee_range
        if query.language:
            filters["languages"] = query.language

        cursor = DoctorMongo.find(filters).sort(SORT_ORDERS.get(query.sort_by, DEFAULT_SORT))
        docs = await cursor.skip(query.offset).limit(query.limit).to_list()
        total = await DoctorMongo.find(filters).count()
        return [self._mongo_to_domain(doc) for doc in docs], total

    async def search(self, text: str, page: int, limit: int) -> Tuple[List[Doctor], int]:
        pattern = contains_pattern(text).pattern
        regex = {"$regex": pattern, "$options": "i"}
        filters = dict(LISTED_FILTER)
        filters["$or"] = [
            {"full_name": regex},
            {"specialization": regex},
            {"qualification": regex},
            {"clinic_address.city": regex},
            {"languages": regex},
        ]
        offset = (max(page, 1) - 1) * limit
        cursor = DoctorMongo.find(filters).sort(SORT_ORDERS[DoctorSort.RATING.value])
        docs = await cursor.skip(offset).limit(limit).to_list()
        total = await DoctorMongo.find(filters).count()
        return [self._mongo_to_domain(doc) for doc in docs], total

    async def summary_stats(self) -> DoctorStats:
        pipeline = [
            {"$match": {"is_active": True}},
            {
                "$group": {
                    "_id": None,
                    "total_doctors": {"$sum": 1},
                    "verified_doctors": {"$sum": {"$cond": [{"$eq": ["$is_verified", True]}, 1, 0]}},
                    "average_experience": {"$avg": "$experience"},
                    "average_rating": {"$avg": "$rating"},
                    "total_consultations": {"$sum": "$total_consultations"},
                    "specializations": {"$addToSet": "$specialization"},
                }
            },
        ]
        result = await DoctorMongo.aggregate(pipeline).to_list()
        if not result:
            return DoctorStats()
        row = result[0]
        return DoctorStats(
            total_doctors=row["total_doctors"],
            verified_doctors=row["verified_doctors"],
            average_experience=row["average_experience"] or 0,
            average_rating=row["average_rating"] or 0,
            total_consultations=row["total_consultations"],
            specializations=sorted(row["specializations"]),
        )

    def _domain_to_mongo(self, doctor: Doctor) -> DoctorMongo:
        """Convert domain entity to MongoDB model."""
        return DoctorMongo(
            id=to_object_id(doctor.id),
            full_name=doctor.full_name,
            email=doctor.email,
            phone=doctor.phone,
            password=doctor.password_hash,
            medical_license_number=doctor.medical_license_number,
            registration_body=doctor.registration_body,
            specialization=doctor.specialization,
            experience=doctor.experience,
            qualification=doctor.qualification,
            clinic_name=doctor.clinic_name,
            clinic_address=ClinicAddressMongo(**asdict(doctor.clinic_address)),
            consultation_fee=doctor.consultation_fee,
            languages=list(doctor.languages),
            is_verified=doctor.is_verified,
            is_active=doctor.is_active,
            profile_complete=doctor.profile_complete,
            availability=[DayAvailabilityMongo(**asdict(day)) for day in doctor.availability],
            profile_photo=doctor.profile_photo,
            bio=doctor.bio,
            total_earnings=doctor.total_earnings,
            pending_withdrawal=doctor.pending_withdrawal,
            bank_details=BankDetailsMongo(**asdict(doctor.bank_details)) if doctor.bank_details else None,
            total_consultations=doctor.total_consultations,
            rating=doctor.rating,
            review_count=doctor.review_count,
            joined_at=doctor.joined_at,
            last_login_at=doctor.last_login_at,
            created_at=doctor.created_at,
            updated_at=doctor.updated_at,
        )

    def _mongo_to_domain(self, doctor_mongo: DoctorMongo) -> Doctor:
        """Convert MongoDB model to domain entity."""
        return Doctor(
            id=to_str_id(doctor_mongo.id),
            full_name=doctor_mongo.full_name,
            email=doctor_mongo.email,
            phone=doctor_mongo.phone,
            password_hash=doctor_mongo.password,
            medical_license_number=doctor_mongo.medical_license_number,
            registration_body=doctor_mongo.registration_body,
            specialization=doctor_mongo.specialization,
            experience=doctor_mongo.experience,
            qualification=doctor_mongo.qualification,
            clinic_name=doctor_mongo.clinic_name,
            clinic_address=ClinicAddress(**doctor_mongo.clinic_address.model_dump()),
            consultation_fee=doctor_mongo.consultation_fee,
            languages=list(doctor_mongo.languages),
            is_verified=doctor_mongo.is_verified,
            is_active=doctor_mongo.is_active,
            profile_complete=doctor_mongo.profile_complete,
            availability=[
                DayAvailability(
                    day=day.day,
                    time_slots=[TimeSlot(**slot.model_dump()) for slot in day.time_slots],
                )
                for day in doctor_mongo.availability
            ],
            profile_photo=doctor_mongo.profile_photo,
            bio=doctor_mongo.bio,
            total_earnings=doctor_mongo.total_earnings,
            pending_withdrawal=doctor_mongo.pending_withdrawal,
            bank_details=(
                BankDetails(**doctor_mongo.bank_details.model_dump()) if doctor_mongo.bank_details else None
            ),
            total_consultations=doctor_mongo.total_consultations,
            rating=doctor_mongo.rating,
            review_count=doctor_mongo.review_count,
            joined_at=doctor_mongo.joined_at,
            last_login_at=doctor_mongo.last_login_at,
            created_at=doctor_mongo.created_at,
            updated_at=doctor_mongo.updated_at,
        )
