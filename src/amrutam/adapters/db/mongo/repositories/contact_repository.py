"""
MongoDB implementation of ContactRepository.
"""

from dataclasses import asdict
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import pymongo

from amrutam.application.dto.queries import ContactQuery, ContactStats
from amrutam.application.ports.repositories.contact_repo import ContactRepository
from amrutam.core.utils.string_utils import contains_pattern
from amrutam.domain.entities.contact import Contact, ContactResponse, InternalNote
from amrutam.domain.enums.contact import OPEN_INQUIRY_STATUSES, PRIORITY_RANK
from ..ids import to_object_id, to_str_id
from ..models.contact_m import ContactMongo, ContactResponseMongo, InternalNoteMongo

OPEN_STATUS_VALUES = [status.value for status in OPEN_INQUIRY_STATUSES]

# Stored priorities are strings; rank them explicitly so "urgent" sorts first
PRIORITY_RANK_EXPRESSION = {
    "$switch": {
        "branches": [
            {"case": {"$eq": ["$priority", priority.value]}, "then": rank}
            for priority, rank in PRIORITY_RANK.items()
        ],
        "default": len(PRIORITY_RANK),
    }
}


def _created_filter(start_date: Optional[datetime], end_date: Optional[datetime]) -> Dict[str, Any]:
    filters: Dict[str, Any] = {}
    if start_date or end_date:
        bounds: Dict[str, Any] = {}
        if start_date:
            bounds["$gte"] = start_date
        if end_date:
            bounds["$lte"] = end_date
        filters["created_at"] = bounds
    return filters


class MongoContactRepository(ContactRepository):
    """MongoDB implementation of ContactRepository."""

    async def save(self, contact: Contact) -> Contact:
        contact_mongo = self._domain_to_mongo(contact)
        if contact_mongo.id is None:
            await contact_mongo.insert()
        else:
            await contact_mongo.save()
        return self._mongo_to_domain(contact_mongo)

    async def find_by_id(self, contact_id: str) -> Optional[Contact]:
        object_id = to_object_id(contact_id)
        if object_id is None:
            return None
        contact_mongo = await ContactMongo.get(object_id)
        return self._mongo_to_domain(contact_mongo) if contact_mongo else None

    async def find_all(self, query: ContactQuery) -> Tuple[List[Contact], int]:
        filters: Dict[str, Any] = {}
        if query.status:
            filters["status"] = query.status
        if query.priority:
            filters["priority"] = query.priority
        if query.inquiry_type:
            filters["inquiry_type"] = query.inquiry_type
        if query.assigned_to:
            filters["assigned_to"] = query.assigned_to
        if query.search:
            regex = {"$regex": contains_pattern(query.search).pattern, "$options": "i"}
            filters["$or"] = [{"name": regex}, {"email": regex}, {"subject": regex}, {"message": regex}]

        cursor = ContactMongo.find(filters).sort([("created_at", pymongo.DESCENDING)])
        docs = await cursor.skip(query.offset).limit(query.limit).to_list()
        total = await ContactMongo.find(filters).count()
        return [self._mongo_to_domain(doc) for doc in docs], total

    async def find_pending(self, limit: int = 50) -> List[Contact]:
        pipeline = [
            {"$match": {"status": {"$in": OPEN_STATUS_VALUES}}},
            {"$addFields": {"priority_rank": PRIORITY_RANK_EXPRESSION}},
            {"$sort": {"priority_rank": 1, "created_at": 1}},
            {"$limit": limit},
            {"$project": {"priority_rank": 0}},
        ]
        docs = await ContactMongo.aggregate(pipeline, projection_model=ContactMongo).to_list()
        return [self._mongo_to_domain(doc) for doc in docs]

    async def stats(
        self, start_date: Optional[datetime] = None, end_date: Optional[datetime] = None
    ) -> ContactStats:
        match = _created_filter(start_date, end_date)
        pipeline = [
            {"$match": match},
            {
                "$group": {
                    "_id": None,
                    "total": {"$sum": 1},
                    "new": {"$sum": {"$cond": [{"$eq": ["$status", "new"]}, 1, 0]}},
                    "in_progress": {"$sum": {"$cond": [{"$eq": ["$status", "in-progress"]}, 1, 0]}},
                    "resolved": {"$sum": {"$cond": [{"$eq": ["$status", "resolved"]}, 1, 0]}},
                    "high_priority": {"$sum": {"$cond": [{"$eq": ["$priority", "high"]}, 1, 0]}},
                    "average_resolution_time": {"$avg": "$resolution_time"},
                    "inquiry_types": {"$addToSet": "$inquiry_type"},
                }
            },
        ]
        result = await ContactMongo.aggregate(pipeline).to_list()
        pending = await ContactMongo.find({"status": {"$in": OPEN_STATUS_VALUES}, **match}).count()
        if not result:
            return ContactStats(pending_inquiries=pending)
        row = result[0]
        return ContactStats(
            total_inquiries=row["total"],
            new_inquiries=row["new"],
            in_progress_inquiries=row["in_progress"],
            resolved_inquiries=row["resolved"],
            high_priority_inquiries=row["high_priority"],
            average_resolution_time=row["average_resolution_time"],
            inquiry_types=sorted(row["inquiry_types"]),
            pending_inquiries=pending,
        )

    def _domain_to_mongo(self, contact: Contact) -> ContactMongo:
        """Convert domain entity to MongoDB model."""
        fields = asdict(contact)
        fields.pop("id")
        fields["response"] = ContactResponseMongo(**asdict(contact.response)) if contact.response else None
        fields["internal_notes"] = [InternalNoteMongo(**asdict(n)) for n in contact.internal_notes]
        return ContactMongo(id=to_object_id(contact.id), **fields)

    def _mongo_to_domain(self, contact_mongo: ContactMongo) -> Contact:
        """Convert MongoDB model to domain entity."""
        fields = contact_mongo.model_dump(exclude={"id", "revision_id"})
        fields["response"] = ContactResponse(**fields["response"]) if fields["response"] else None
        fields["internal_notes"] = [InternalNote(**n) for n in fields["internal_notes"]]
        return Contact(id=to_str_id(contact_mongo.id), **fields)
