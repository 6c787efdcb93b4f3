"""
Appointment repository interface for data access abstraction.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional, Tuple

from ....domain.entities.appointment import Appointment
from ...dto.queries import AppointmentQuery


class AppointmentRepository(ABC):
    """Abstract repository for appointment data access."""

    @abstractmethod
    async def save(self, appointment: Appointment) -> Appointment:
        """Insert or update an appointment; assigns ``id`` on first save."""
        pass

    @abstractmethod
    async def find_by_id(self, appointment_id: str) -> Optional[Appointment]:
        """Find an appointment by ID."""
        pass

    @abstractmethod
    async def find_active_in_slot(
        self,
        doctor_id: str,
        day: date,
        time: str,
        exclude_id: Optional[str] = None,
    ) -> Optional[Appointment]:
        """Find a non-cancelled appointment in the doctor's slot at ``day`` / ``time``."""
        pass

    @abstractmethod
    async def find_by_doctor(
        self, doctor_id: str, query: AppointmentQuery
    ) -> Tuple[List[Appointment], int]:
        """Doctor's appointments ordered by date then time, plus total count."""
        pass

    @abstractmethod
    async def find_by_patient(
        self, email: str, status: Optional[str], page: int, limit: int
    ) -> Tuple[List[Appointment], int]:
        """Patient's appointments, most recent date first, plus total count."""
        pass

    @abstractmethod
    async def booked_times(self, doctor_id: str, day: date) -> List[str]:
        """Start times of slot-holding appointments for the doctor on ``day``."""
        pass

    @abstractmethod
    async def mark_paid(self, appointment_id: str, transaction_id: str) -> bool:
        """Set payment status to paid; False when the appointment does not exist."""
        pass
