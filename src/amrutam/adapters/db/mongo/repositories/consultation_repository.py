"""
MongoDB implementation of ConsultationRepository.
"""

from dataclasses import asdict
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import pymongo

from amrutam.application.dto.queries import ConsultationQuery, ConsultationStats
from amrutam.application.ports.repositories.consultation_repo import ConsultationRepository
from amrutam.core.utils.datetime_utils import utc_now
from amrutam.domain.entities.consultation import Attachment, Consultation, Medication, Prescription
from amrutam.domain.enums.scheduling import ConsultationSort
from ..ids import to_object_id, to_str_id
from ..models.consultation_m import (
    AttachmentMongo,
    ConsultationMongo,
    MedicationMongo,
    PrescriptionMongo,
)

SORT_ORDERS = {
    ConsultationSort.DATE_ASC.value: [("consultation_date", pymongo.ASCENDING)],
    ConsultationSort.DATE_DESC.value: [("consultation_date", pymongo.DESCENDING)],
    ConsultationSort.STATUS.value: [("status", pymongo.ASCENDING), ("consultation_date", pymongo.DESCENDING)],
}
DEFAULT_SORT = SORT_ORDERS[ConsultationSort.DATE_DESC.value]


def _date_filter(start_date: Optional[datetime], end_date: Optional[datetime]) -> Dict[str, Any]:
    bounds: Dict[str, Any] = {}
    if start_date:
        bounds["$gte"] = start_date
    if end_date:
        bounds["$lte"] = end_date
    return bounds


class MongoConsultationRepository(ConsultationRepository):
    """MongoDB implementation of ConsultationRepository."""

    async def save(self, consultation: Consultation) -> Consultation:
        consultation_mongo = self._domain_to_mongo(consultation)
        if consultation_mongo.id is None:
            await consultation_mongo.insert()
        else:
            await consultation_mongo.save()
        return self._mongo_to_domain(consultation_mongo)

    async def find_by_id(self, consultation_id: str) -> Optional[Consultation]:
        object_id = to_object_id(consultation_id)
        if object_id is None:
            return None
        consultation_mongo = await ConsultationMongo.get(object_id)
        return self._mongo_to_domain(consultation_mongo) if consultation_mongo else None

    async def find_by_doctor(
        self, doctor_id: str, query: ConsultationQuery
    ) -> Tuple[List[Consultation], int]:
        object_id = to_object_id(doctor_id)
        if object_id is None:
            return [], 0

        filters: Dict[str, Any] = {"doctor_id": object_id}
        if query.status:
            filters["status"] = query.status
        bounds = _date_filter(query.start_date, query.end_date)
        if bounds:
            filters["consultation_date"] = bounds

        cursor = ConsultationMongo.find(filters).sort(SORT_ORDERS.get(query.sort_by, DEFAULT_SORT))
        docs = await cursor.skip(query.offset).limit(query.limit).to_list()
        total = await ConsultationMongo.find(filters).count()
        return [self._mongo_to_domain(doc) for doc in docs], total

    async def stats(
        self,
        doctor_id: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> ConsultationStats:
        match: Dict[str, Any] = {}
        if doctor_id:
            object_id = to_object_id(doctor_id)
            if object_id is None:
                return ConsultationStats()
            match["doctor_id"] = object_id
        bounds = _date_filter(start_date, end_date)
        if bounds:
            match["consultation_date"] = bounds

        pipeline = [
            {"$match": match},
            {
                "$group": {
                    "_id": None,
                    "total": {"$sum": 1},
                    "completed": {"$sum": {"$cond": [{"$eq": ["$status", "completed"]}, 1, 0]}},
                    "scheduled": {"$sum": {"$cond": [{"$eq": ["$status", "scheduled"]}, 1, 0]}},
                    "cancelled": {"$sum": {"$cond": [{"$eq": ["$status", "cancelled"]}, 1, 0]}},
                    "revenue": {"$sum": "$consultation_fee"},
                    "average_fee": {"$avg": "$consultation_fee"},
                    "average_rating": {"$avg": "$doctor_rating"},
                }
            },
        ]
        result = await ConsultationMongo.aggregate(pipeline).to_list()
        if not result:
            return ConsultationStats()
        row = result[0]
        return ConsultationStats(
            total_consultations=row["total"],
            completed_consultations=row["completed"],
            scheduled_consultations=row["scheduled"],
            cancelled_consultations=row["cancelled"],
            total_revenue=row["revenue"],
            average_consultation_fee=row["average_fee"] or 0,
            average_rating=row["average_rating"],
        )

    async def mark_paid(self, consultation_id: str, transaction_id: str) -> bool:
        object_id = to_object_id(consultation_id)
        if object_id is None:
            return False
        result = await ConsultationMongo.find_one(ConsultationMongo.id == object_id).update(
            {"$set": {"payment_status": "paid", "transaction_id": transaction_id, "updated_at": utc_now()}}
        )
        return bool(result and result.matched_count)

    def _domain_to_mongo(self, consultation: Consultation) -> ConsultationMongo:
        """Convert domain entity to MongoDB model."""
        fields = asdict(consultation)
        fields.pop("id")
        fields["doctor_id"] = to_object_id(consultation.doctor_id)
        fields["current_medications"] = [MedicationMongo(**asdict(m)) for m in consultation.current_medications]
        fields["prescriptions"] = [PrescriptionMongo(**asdict(p)) for p in consultation.prescriptions]
        fields["attachments"] = [AttachmentMongo(**asdict(a)) for a in consultation.attachments]
        return ConsultationMongo(id=to_object_id(consultation.id), **fields)

    def _mongo_to_domain(self, consultation_mongo: ConsultationMongo) -> Consultation:
        """Convert MongoDB model to domain entity."""
        fields = consultation_mongo.model_dump(exclude={"id", "revision_id"})
        fields["doctor_id"] = to_str_id(consultation_mongo.doctor_id)
        fields["current_medications"] = [Medication(**m) for m in fields["current_medications"]]
        fields["prescriptions"] = [Prescription(**p) for p in fields["prescriptions"]]
        fields["attachments"] = [Attachment(**a) for a in fields["attachments"]]
        return Consultation(id=to_str_id(consultation_mongo.id), **fields)
