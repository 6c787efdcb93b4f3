"""
Contact inquiry repository interface for data access abstraction.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from ....domain.entities.contact import Contact
from ...dto.queries import ContactQuery, ContactStats


class ContactRepository(ABC):
    """Abstract repository for contact inquiry data access."""

    @abstractmethod
    async def save(self, contact: Contact) -> Contact:
        """Insert or update an inquiry; assigns ``id`` on first save."""
        pass

    @abstractmethod
    async def find_by_id(self, contact_id: str) -> Optional[Contact]:
        """Find an inquiry by ID."""
        pass

    @abstractmethod
    async def find_all(self, query: ContactQuery) -> Tuple[List[Contact], int]:
        """Inquiries matching the filters, newest first, plus total count."""
        pass

    @abstractmethod
    async def find_pending(self, limit: int = 50) -> List[Contact]:
        """Open inquiries, highest priority first, then oldest first."""
        pass

    @abstractmethod
    async def stats(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> ContactStats:
        """Aggregate figures over inquiries created in the range."""
        pass
