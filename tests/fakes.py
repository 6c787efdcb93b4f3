"""
In-memory repositories standing in for MongoDB in API and use case tests.

Stored entities are deep-copied on the way in and out, so an entity is only
changed in the store by saving it, as with the Mongo repositories.
"""

import asyncio
import copy
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence, Tuple

from bson import ObjectId

from amrutam.application.dto.queries import (
    AppointmentQuery,
    ConsultationQuery,
    ConsultationStats,
    ContactQuery,
    ContactStats,
    DoctorDirectoryQuery,
    DoctorStats,
    EarningsSummary,
    PaymentQuery,
)
from amrutam.application.ports.repositories.appointment_repo import AppointmentRepository
from amrutam.application.ports.repositories.consultation_repo import ConsultationRepository
from amrutam.application.ports.repositories.contact_repo import ContactRepository
from amrutam.application.ports.repositories.doctor_repo import DoctorRepository
from amrutam.application.ports.repositories.payment_repo import PaymentRepository
from amrutam.core.utils.string_utils import contains_pattern
from amrutam.domain.entities.appointment import Appointment
from amrutam.domain.entities.consultation import Consultation
from amrutam.domain.entities.contact import Contact
from amrutam.domain.entities.doctor import Doctor
from amrutam.domain.entities.payment import Payment
from amrutam.domain.enums.contact import OPEN_INQUIRY_STATUSES, PRIORITY_RANK
from amrutam.domain.enums.scheduling import ACTIVE_APPOINTMENT_STATUSES, AppointmentStatus


def _page(items: list, offset: int, limit: int) -> list:
    return items[offset:offset + limit]


def _offset(page: int, limit: int) -> int:
    return (max(page, 1) - 1) * limit


def _average(values: list) -> Optional[float]:
    return sum(values) / len(values) if values else None


class _Store:
    def __init__(self):
        self.items: Dict[str, object] = {}

    def put(self, entity):
        if entity.id is None:
            entity.id = str(ObjectId())
        self.items[entity.id] = copy.deepcopy(entity)
        return copy.deepcopy(entity)

    def get(self, entity_id: Optional[str]):
        entity = self.items.get(entity_id or "")
        return copy.deepcopy(entity) if entity is not None else None

    def all(self) -> list:
        return [copy.deepcopy(entity) for entity in self.items.values()]


class InMemoryDoctorRepository(DoctorRepository):
    SORT_KEYS = {
        "rating": (lambda d: (d.rating, d.review_count), True),
        "experience": (lambda d: d.experience, True),
        "fee-low": (lambda d: d.consultation_fee, False),
        "fee-high": (lambda d: d.consultation_fee, True),
    }

    def __init__(self):
        self._store = _Store()

    async def save(self, doctor: Doctor) -> Doctor:
        return self._store.put(doctor)

    async def find_by_id(self, doctor_id: str) -> Optional[Doctor]:
        return self._store.get(doctor_id)

    async def find_by_ids(self, doctor_ids: Sequence[str]) -> List[Doctor]:
        return [d for d in (self._store.get(i) for i in doctor_ids) if d is not None]

    async def find_by_email(self, email: str) -> Optional[Doctor]:
        email = email.strip().lower()
        return next((d for d in self._store.all() if d.email == email), None)

    async def find_by_email_or_license(self, email: str, medical_license_number: str) -> Optional[Doctor]:
        email = email.strip().lower()
        return next(
            (
                d for d in self._store.all()
                if d.email == email or d.medical_license_number == medical_license_number
            ),
            None,
        )

    def _listed(self) -> List[Doctor]:
        return [d for d in self._store.all() if d.is_verified and d.is_active]

    async def find_listed(self, query: DoctorDirectoryQuery) -> Tuple[List[Doctor], int]:
        doctors = self._listed()
        if query.specialization:
            doctors = [d for d in doctors if d.specialization == query.specialization]
        if query.city:
            pattern = contains_pattern(query.city)
            doctors = [d for d in doctors if pattern.search(d.clinic_address.city or "")]
        if query.min_fee is not None:
            doctors = [d for d in doctors if d.consultation_fee >= query.min_fee]
        if query.max_fee is not None:
            doctors = [d for d in doctors if d.consultation_fee <= query.max_fee]
        if query.language:
            doctors = [d for d in doctors if query.language in d.languages]

        key, reverse = self.SORT_KEYS.get(query.sort_by, self.SORT_KEYS["rating"])
        doctors.sort(key=key, reverse=reverse)
        return _page(doctors, query.offset, query.limit), len(doctors)

    async def search(self, text: str, page: int, limit: int) -> Tuple[List[Doctor], int]:
        pattern = contains_pattern(text)

        def matches(doctor: Doctor) -> bool:
            fields = [doctor.full_name, doctor.specialization, doctor.qualification, doctor.clinic_address.city or ""]
            return any(pattern.search(value) for value in fields + list(doctor.languages))

        doctors = [d for d in self._listed() if matches(d)]
        key, reverse = self.SORT_KEYS["rating"]
        doctors.sort(key=key, reverse=reverse)
        return _page(doctors, _offset(page, limit), limit), len(doctors)

    async def summary_stats(self) -> DoctorStats:
        doctors = [d for d in self._store.all() if d.is_active]
        if not doctors:
            return DoctorStats()
        return DoctorStats(
            total_doctors=len(doctors),
            verified_doctors=sum(1 for d in doctors if d.is_verified),
            average_experience=_average([d.experience for d in doctors]) or 0,
            average_rating=_average([d.rating for d in doctors]) or 0,
            total_consultations=sum(d.total_consultations for d in doctors),
            specializations=sorted({d.specialization for d in doctors}),
        )


class InMemoryAppointmentRepository(AppointmentRepository):
    def __init__(self):
        self._store = _Store()

    async def save(self, appointment: Appointment) -> Appointment:
        return self._store.put(appointment)

    async def find_by_id(self, appointment_id: str) -> Optional[Appointment]:
        return self._store.get(appointment_id)

    def _holding(self, doctor_id: str, day: date) -> List[Appointment]:
        return [
            a for a in self._store.all()
            if a.doctor_id == doctor_id and a.appointment_date == day and a.status != AppointmentStatus.CANCELLED
        ]

    async def find_active_in_slot(
        self,
        doctor_id: str,
        day: date,
        time: str,
        exclude_id: Optional[str] = None,
    ) -> Optional[Appointment]:
        clash = next(
            (a for a in self._holding(doctor_id, day) if a.appointment_time == time and a.id != exclude_id),
            None,
        )
        # Yield like a database round trip would
        await asyncio.sleep(0)
        return clash

    async def find_by_doctor(self, doctor_id: str, query: AppointmentQuery) -> Tuple[List[Appointment], int]:
        appointments = [a for a in self._store.all() if a.doctor_id == doctor_id]
        if query.upcoming_after:
            appointments = [
                a for a in appointments
                if a.appointment_date >= query.upcoming_after.date() and a.status in ACTIVE_APPOINTMENT_STATUSES
            ]
        else:
            if query.status:
                appointments = [a for a in appointments if a.status == query.status]
            if query.on_date:
                appointments = [a for a in appointments if a.appointment_date == query.on_date]
        appointments.sort(key=lambda a: (a.appointment_date, a.appointment_time))
        return _page(appointments, query.offset, query.limit), len(appointments)

    async def find_by_patient(
        self, email: str, status: Optional[str], page: int, limit: int
    ) -> Tuple[List[Appointment], int]:
        email = email.strip().lower()
        appointments = [a for a in self._store.all() if a.patient_email == email]
        if status:
            appointments = [a for a in appointments if a.status == status]
        appointments.sort(key=lambda a: (a.appointment_date, a.appointment_time), reverse=True)
        return _page(appointments, _offset(page, limit), limit), len(appointments)

    async def booked_times(self, doctor_id: str, day: date) -> List[str]:
        return [a.appointment_time for a in self._holding(doctor_id, day)]

    async def mark_paid(self, appointment_id: str, transaction_id: str) -> bool:
        appointment = self._store.get(appointment_id)
        if appointment is None:
            return False
        appointment.payment_status = "paid"
        appointment.transaction_id = transaction_id
        self._store.put(appointment)
        return True


class InMemoryConsultationRepository(ConsultationRepository):
    def __init__(self):
        self._store = _Store()

    async def save(self, consultation: Consultation) -> Consultation:
        return self._store.put(consultation)

    async def find_by_id(self, consultation_id: str) -> Optional[Consultation]:
        return self._store.get(consultation_id)

    def _in_range(
        self, consultations: List[Consultation], start: Optional[datetime], end: Optional[datetime]
    ) -> List[Consultation]:
        if start:
            consultations = [c for c in consultations if c.consultation_date >= start]
        if end:
            consultations = [c for c in consultations if c.consultation_date <= end]
        return consultations

    async def find_by_doctor(self, doctor_id: str, query: ConsultationQuery) -> Tuple[List[Consultation], int]:
        consultations = [c for c in self._store.all() if c.doctor_id == doctor_id]
        if query.status:
            consultations = [c for c in consultations if c.status == query.status]
        consultations = self._in_range(consultations, query.start_date, query.end_date)

        if query.sort_by == "date-asc":
            consultations.sort(key=lambda c: c.consultation_date)
        elif query.sort_by == "status":
            consultations.sort(key=lambda c: c.consultation_date, reverse=True)
            consultations.sort(key=lambda c: c.status)
        else:
            consultations.sort(key=lambda c: c.consultation_date, reverse=True)
        return _page(consultations, query.offset, query.limit), len(consultations)

    async def stats(
        self,
        doctor_id: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> ConsultationStats:
        consultations = self._store.all()
        if doctor_id:
            consultations = [c for c in consultations if c.doctor_id == doctor_id]
        consultations = self._in_range(consultations, start_date, end_date)
        if not consultations:
            return ConsultationStats()

        def count(status: str) -> int:
            return sum(1 for c in consultations if c.status == status)

        return ConsultationStats(
            total_consultations=len(consultations),
            completed_consultations=count("completed"),
            scheduled_consultations=count("scheduled"),
            cancelled_consultations=count("cancelled"),
            total_revenue=sum(c.consultation_fee for c in consultations),
            average_consultation_fee=_average([c.consultation_fee for c in consultations]) or 0,
            average_rating=_average([c.doctor_rating for c in consultations if c.doctor_rating is not None]),
        )

    async def mark_paid(self, consultation_id: str, transaction_id: str) -> bool:
        consultation = self._store.get(consultation_id)
        if consultation is None:
            return False
        consultation.payment_status = "paid"
        consultation.transaction_id = transaction_id
        self._store.put(consultation)
        return True


class InMemoryContactRepository(ContactRepository):
    def __init__(self):
        self._store = _Store()

    async def save(self, contact: Contact) -> Contact:
        return self._store.put(contact)

    async def find_by_id(self, contact_id: str) -> Optional[Contact]:
        return self._store.get(contact_id)

    async def find_all(self, query: ContactQuery) -> Tuple[List[Contact], int]:
        contacts = self._store.all()
        for name in ("status", "priority", "inquiry_type", "assigned_to"):
            value = getattr(query, name)
            if value:
                contacts = [c for c in contacts if getattr(c, name) == value]
        if query.search:
            pattern = contains_pattern(query.search)
            contacts = [
                c for c in contacts
                if any(pattern.search(value or "") for value in (c.name, c.email, c.subject, c.message))
            ]
        contacts.sort(key=lambda c: c.created_at, reverse=True)
        return _page(contacts, query.offset, query.limit), len(contacts)

    async def find_pending(self, limit: int = 50) -> List[Contact]:
        contacts = [c for c in self._store.all() if c.status in OPEN_INQUIRY_STATUSES]
        contacts.sort(key=lambda c: (PRIORITY_RANK.get(c.priority, len(PRIORITY_RANK)), c.created_at))
        return contacts[:limit]

    async def stats(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> ContactStats:
        contacts = self._store.all()
        if start_date:
            contacts = [c for c in contacts if c.created_at >= start_date]
        if end_date:
            contacts = [c for c in contacts if c.created_at <= end_date]
        pending = sum(1 for c in contacts if c.status in OPEN_INQUIRY_STATUSES)
        if not contacts:
            return ContactStats(pending_inquiries=pending)

        def count(status: str) -> int:
            return sum(1 for c in contacts if c.status == status)

        return ContactStats(
            total_inquiries=len(contacts),
            new_inquiries=count("new"),
            in_progress_inquiries=count("in-progress"),
            resolved_inquiries=count("resolved"),
            high_priority_inquiries=sum(1 for c in contacts if c.priority == "high"),
            average_resolution_time=_average([c.resolution_time for c in contacts if c.resolution_time is not None]),
            inquiry_types=sorted({c.inquiry_type for c in contacts}),
            pending_inquiries=pending,
        )


class InMemoryPaymentRepository(PaymentRepository):
    def __init__(self):
        self._store = _Store()

    async def save(self, payment: Payment) -> Payment:
        return self._store.put(payment)

    async def find_by_transaction_id(self, transaction_id: str) -> Optional[Payment]:
        return next((p for p in self._store.all() if p.transaction_id == transaction_id), None)

    @staticmethod
    def _latest_first(payments: List[Payment]) -> List[Payment]:
        return sorted(payments, key=lambda p: (p.payment_date or datetime.min, p.created_at), reverse=True)

    async def find_by_doctor(self, doctor_id: str, query: PaymentQuery) -> Tuple[List[Payment], int]:
        payments = [p for p in self._store.all() if p.doctor_id == doctor_id]
        if query.status:
            payments = [p for p in payments if p.status == query.status]
        if query.start_date:
            payments = [p for p in payments if p.payment_date and p.payment_date >= query.start_date]
        if query.end_date:
            payments = [p for p in payments if p.payment_date and p.payment_date <= query.end_date]
        payments = self._latest_first(payments)
        return _page(payments, query.offset, query.limit), len(payments)

    async def find_by_patient(
        self, email: str, status: Optional[str], page: int, limit: int
    ) -> Tuple[List[Payment], int]:
        email = email.strip().lower()
        payments = [p for p in self._store.all() if p.patient_email == email]
        if status:
            payments = [p for p in payments if p.status == status]
        payments = self._latest_first(payments)
        return _page(payments, _offset(page, limit), limit), len(payments)

    async def earnings_summary(self, doctor_id: str, start_date: datetime, end_date: datetime) -> EarningsSummary:
        payments = [
            p for p in self._store.all()
            if p.doctor_id == doctor_id
            and p.status == "completed"
            and p.payment_date is not None
            and start_date <= p.payment_date <= end_date
        ]
        if not payments:
            return EarningsSummary()
        return EarningsSummary(
            total_gross_earnings=sum(p.doctor_earning.gross_amount or 0 for p in payments),
            total_platform_commission=sum(p.doctor_earning.platform_commission or 0 for p in payments),
            total_net_earnings=sum(p.doctor_earning.net_amount or 0 for p in payments),
            total_transactions=len(payments),
            average_transaction_value=_average([p.amount for p in payments]) or 0,
        )

    async def pending_settlement(self, doctor_id: str) -> float:
        return sum(
            p.doctor_earning.net_amount or 0
            for p in self._store.all()
            if p.doctor_id == doctor_id and p.status == "completed" and p.settlement_status == "pending"
        )


