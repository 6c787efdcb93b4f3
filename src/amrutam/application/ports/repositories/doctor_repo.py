"""
Doctor repository interface for data access abstraction.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from ....domain.entities.doctor import Doctor
from ...dto.queries import DoctorDirectoryQuery, DoctorStats


class DoctorRepository(ABC):
    """Abstract repository for doctor data access."""

    @abstractmethod
    async def save(self, doctor: Doctor) -> Doctor:
        """Insert or update a doctor; assigns ``id`` on first save."""
        pass

    @abstractmethod
    async def find_by_id(self, doctor_id: str) -> Optional[Doctor]:
        """Find a doctor by ID."""
        pass

    @abstractmethod
    async def find_by_ids(self, doctor_ids: Sequence[str]) -> List[Doctor]:
        """Find several doctors at once; unknown ids are skipped."""
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Doctor]:
        """Find a doctor by (lower-cased) email."""
        pass

    @abstractmethod
    async def find_by_email_or_license(
        self, email: str, medical_license_number: str
    ) -> Optional[Doctor]:
        """Find a doctor holding either the email or the license number."""
        pass

    @abstractmethod
    async def find_listed(self, query: DoctorDirectoryQuery) -> Tuple[List[Doctor], int]:
        """Verified, active doctors matching the directory filters, plus total count."""
        pass

    @abstractmethod
    async def search(self, text: str, page: int, limit: int) -> Tuple[List[Doctor], int]:
        """Case-insensitive search over name, specialization, qualification, city and languages."""
        pass

    @abstractmethod
    async def summary_stats(self) -> DoctorStats:
        """Aggregate figures over active doctors."""
        pass
