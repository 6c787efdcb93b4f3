"""
Consultation repository interface for data access abstraction.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from ....domain.entities.consultation import Consultation
from ...dto.queries import ConsultationQuery, ConsultationStats


class ConsultationRepository(ABC):
    """Abstract repository for consultation data access."""

    @abstractmethod
    async def save(self, consultation: Consultation) -> Consultation:
        """Insert or update a consultation; assigns ``id`` on first save."""
        pass

    @abstractmethod
    async def find_by_id(self, consultation_id: str) -> Optional[Consultation]:
        """Find a consultation by ID."""
        pass

    @abstractmethod
    async def find_by_doctor(
        self, doctor_id: str, query: ConsultationQuery
    ) -> Tuple[List[Consultation], int]:
        """Doctor's consultations with filters and sort, plus total count."""
        pass

    @abstractmethod
    async def stats(
        self,
        doctor_id: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> ConsultationStats:
        """Aggregate figures, optionally narrowed to a doctor and date range."""
        pass

    @abstractmethod
    async def mark_paid(self, consultation_id: str, transaction_id: str) -> bool:
        """Set payment status to paid; False when the consultation does not exist."""
        pass
