"""
MongoDB implementation of AppointmentRepository.
"""

from dataclasses import asdict
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

import pymongo

from amrutam.application.dto.queries import AppointmentQuery
from amrutam.application.ports.repositories.appointment_repo import AppointmentRepository
from amrutam.core.utils.datetime_utils import day_range, start_of_day, utc_now
from amrutam.domain.entities.appointment import Appointment, PatientFeedback
from amrutam.domain.enums.scheduling import ACTIVE_APPOINTMENT_STATUSES, AppointmentStatus
from ..ids import to_object_id, to_str_id
from ..models.appointment_m import AppointmentMongo, PatientFeedbackMongo

ACTIVE_STATUS_VALUES = [status.value for status in ACTIVE_APPOINTMENT_STATUSES]
# Any appointment that is not cancelled keeps its slot
SLOT_HOLDING = {"$ne": AppointmentStatus.CANCELLED.value}


def _as_date(value: Optional[datetime]) -> Optional[date]:
    return value.date() if value is not None else None


class MongoAppointmentRepository(AppointmentRepository):
    """MongoDB implementation of AppointmentRepository."""

    async def save(self, appointment: Appointment) -> Appointment:
        appointment_mongo = self._domain_to_mongo(appointment)
        if appointment_mongo.id is None:
            await appointment_mongo.insert()
        else:
            await appointment_mongo.save()
        return self._mongo_to_domain(appointment_mongo)

    async def find_by_id(self, appointment_id: str) -> Optional[Appointment]:
        object_id = to_object_id(appointment_id)
        if object_id is None:
            return None
        appointment_mongo = await AppointmentMongo.get(object_id)
        return self._mongo_to_domain(appointment_mongo) if appointment_mongo else None

    async def find_active_in_slot(
        self,
        doctor_id: str,
        day: date,
        time: str,
        exclude_id: Optional[str] = None,
    ) -> Optional[Appointment]:
        filters: Dict[str, Any] = {
            "doctor_id": to_object_id(doctor_id),
            "appointment_date": start_of_day(day),
            "appointment_time": time,
            "status": SLOT_HOLDING,
        }
        excluded = to_object_id(exclude_id)
        if excluded is not None:
            filters["_id"] = {"$ne": excluded}
        appointment_mongo = await AppointmentMongo.find_one(filters)
        return self._mongo_to_domain(appointment_mongo) if appointment_mongo else None

    async def find_by_doctor(
        self, doctor_id: str, query: AppointmentQuery
    ) -> Tuple[List[Appointment], int]:
        object_id = to_object_id(doctor_id)
        if object_id is None:
            return [], 0

        filters: Dict[str, Any] = {"doctor_id": object_id}
        if query.status:
            filters["status"] = query.status
        if query.on_date:
            start, end = day_range(query.on_date)
            filters["appointment_date"] = {"$gte": start, "$lt": end}
        if query.upcoming_after:
            # Upcoming wins over a specific date, as in the listing endpoint
            filters["appointment_date"] = {"$gte": start_of_day(query.upcoming_after.date())}
            filters["status"] = {"$in": ACTIVE_STATUS_VALUES}

        cursor = AppointmentMongo.find(filters).sort(
            [("appointment_date", pymongo.ASCENDING), ("appointment_time", pymongo.ASCENDING)]
        )
        docs = await cursor.skip(query.offset).limit(query.limit).to_list()
        total = await AppointmentMongo.find(filters).count()
        return [self._mongo_to_domain(doc) for doc in docs], total

    async def find_by_patient(
        self, email: str, status: Optional[str], page: int, limit: int
    ) -> Tuple[List[Appointment], int]:
        filters: Dict[str, Any] = {"patient_email": email.strip().lower()}
        if status:
            filters["status"] = status
        offset = (max(page, 1) - 1) * limit
        cursor = AppointmentMongo.find(filters).sort(
            [("appointment_date", pymongo.DESCENDING), ("appointment_time", pymongo.DESCENDING)]
        )
        docs = await cursor.skip(offset).limit(limit).to_list()
        total = await AppointmentMongo.find(filters).count()
        return [self._mongo_to_domain(doc) for doc in docs], total

    async def booked_times(self, doctor_id: str, day: date) -> List[str]:
        object_id = to_object_id(doctor_id)
        if object_id is None:
            return []
        docs = await AppointmentMongo.find(
            {
                "doctor_id": object_id,
                "appointment_date": start_of_day(day),
                "status": SLOT_HOLDING,
            }
        ).to_list()
        return [doc.appointment_time for doc in docs]

    async def mark_paid(self, appointment_id: str, transaction_id: str) -> bool:
        object_id = to_object_id(appointment_id)
        if object_id is None:
            return False
        result = await AppointmentMongo.find_one(AppointmentMongo.id == object_id).update(
            {"$set": {"payment_status": "paid", "transaction_id": transaction_id, "updated_at": utc_now()}}
        )
        return bool(result and result.matched_count)

    def _domain_to_mongo(self, appointment: Appointment) -> AppointmentMongo:
        """Convert domain entity to MongoDB model."""
        return AppointmentMongo(
            id=to_object_id(appointment.id),
            doctor_id=to_object_id(appointment.doctor_id),
            patient_name=appointment.patient_name,
            patient_email=appointment.patient_email,
            patient_phone=appointment.patient_phone,
            patient_age=appointment.patient_age,
            appointment_date=start_of_day(appointment.appointment_date),
            appointment_time=appointment.appointment_time,
            duration=appointment.duration,
            appointment_type=appointment.appointment_type,
            consultation_mode=appointment.consultation_mode,
            reason_for_visit=appointment.reason_for_visit,
            symptoms=list(appointment.symptoms),
            urgency_level=appointment.urgency_level,
            status=appointment.status,
            confirmation_status=appointment.confirmation_status,
            booked_at=appointment.booked_at,
            booked_by=appointment.booked_by,
            consultation_fee=appointment.consultation_fee,
            payment_status=appointment.payment_status,
            payment_method=appointment.payment_method,
            transaction_id=appointment.transaction_id,
            reminders_sent=list(appointment.reminders_sent),
            original_appointment_date=(
                start_of_day(appointment.original_appointment_date)
                if appointment.original_appointment_date
                else None
            ),
            rescheduled_by=appointment.rescheduled_by,
            rescheduling_reason=appointment.rescheduling_reason,
            rescheduling_count=appointment.rescheduling_count,
            cancellation_reason=appointment.cancellation_reason,
            cancelled_by=appointment.cancelled_by,
            cancelled_at=appointment.cancelled_at,
            meeting_link=appointment.meeting_link,
            meeting_id=appointment.meeting_id,
            special_instructions=appointment.special_instructions,
            doctor_notes=appointment.doctor_notes,
            is_follow_up=appointment.is_follow_up,
            parent_consultation_id=to_object_id(appointment.parent_consultation_id),
            patient_feedback=(
                PatientFeedbackMongo(**asdict(appointment.patient_feedback))
                if appointment.patient_feedback
                else None
            ),
            created_at=appointment.created_at,
            updated_at=appointment.updated_at,
        )

    def _mongo_to_domain(self, appointment_mongo: AppointmentMongo) -> Appointment:
        """Convert MongoDB model to domain entity."""
        return Appointment(
            id=to_str_id(appointment_mongo.id),
            doctor_id=to_str_id(appointment_mongo.doctor_id),
            patient_name=appointment_mongo.patient_name,
            patient_email=appointment_mongo.patient_email,
            patient_phone=appointment_mongo.patient_phone,
            patient_age=appointment_mongo.patient_age,
            appointment_date=_as_date(appointment_mongo.appointment_date),
            appointment_time=appointment_mongo.appointment_time,
            duration=appointment_mongo.duration,
            appointment_type=appointment_mongo.appointment_type,
            consultation_mode=appointment_mongo.consultation_mode,
            reason_for_visit=appointment_mongo.reason_for_visit,
            symptoms=list(appointment_mongo.symptoms),
            urgency_level=appointment_mongo.urgency_level,
            status=appointment_mongo.status,
            confirmation_status=appointment_mongo.confirmation_status,
            booked_at=appointment_mongo.booked_at,
            booked_by=appointment_mongo.booked_by,
            consultation_fee=appointment_mongo.consultation_fee,
            payment_status=appointment_mongo.payment_status,
            payment_method=appointment_mongo.payment_method,
            transaction_id=appointment_mongo.transaction_id,
            reminders_sent=list(appointment_mongo.reminders_sent),
            original_appointment_date=_as_date(appointment_mongo.original_appointment_date),
            rescheduled_by=appointment_mongo.rescheduled_by,
            rescheduling_reason=appointment_mongo.rescheduling_reason,
            rescheduling_count=appointment_mongo.rescheduling_count,
            cancellation_reason=appointment_mongo.cancellation_reason,
            cancelled_by=appointment_mongo.cancelled_by,
            cancelled_at=appointment_mongo.cancelled_at,
            meeting_link=appointment_mongo.meeting_link,
            meeting_id=appointment_mongo.meeting_id,
            special_instructions=appointment_mongo.special_instructions,
            doctor_notes=appointment_mongo.doctor_notes,
            is_follow_up=appointment_mongo.is_follow_up,
            parent_consultation_id=to_str_id(appointment_mongo.parent_consultation_id),
            patient_feedback=(
                PatientFeedback(**appointment_mongo.patient_feedback.model_dump())
                if appointment_mongo.patient_feedback
                else None
            ),
            created_at=appointment_mongo.created_at,
            updated_at=appointment_mongo.updated_at,
        )
