"""
Payment repository interface for data access abstraction.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from ....domain.entities.payment import Payment
from ...dto.queries import EarningsSummary, PaymentQuery


class PaymentRepository(ABC):
    """Abstract repository for payment data access."""

    @abstractmethod
    async def save(self, payment: Payment) -> Payment:
        """Insert or update a payment; assigns ``id`` on first save."""
        pass

    @abstractmethod
    async def find_by_transaction_id(self, transaction_id: str) -> Optional[Payment]:
        """Find a payment by its transaction reference."""
        pass

    @abstractmethod
    async def find_by_doctor(self, doctor_id: str, query: PaymentQuery) -> Tuple[List[Payment], int]:
        """Doctor's payments, latest payment date first, plus total count."""
        pass

    @abstractmethod
    async def find_by_patient(
        self, email: str, status: Optional[str], page: int, limit: int
    ) -> Tuple[List[Payment], int]:
        """Patient's payments, newest first, plus total count."""
        pass

    @abstractmethod
    async def earnings_summary(
        self, doctor_id: str, start_date: datetime, end_date: datetime
    ) -> EarningsSummary:
        """Totals over the doctor's completed payments dated within the range."""
        pass

    @abstractmethod
    async def pending_settlement(self, doctor_id: str) -> float:
        """Sum of net earnings on completed payments not yet settled."""
        pass
