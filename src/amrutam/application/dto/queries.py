"""Query filters and aggregate results shared by repositories and use cases."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional


@dataclass
class PageRequest:
    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (max(self.page, 1) - 1) * self.limit


@dataclass
class DoctorDirectoryQuery(PageRequest):
    """Filters for the public doctor listing (verified, active doctors only)."""

    specialization: Optional[str] = None
    city: Optional[str] = None
    min_fee: Optional[float] = None
    max_fee: Optional[float] = None
    language: Optional[str] = None
    sort_by: str = "rating"


@dataclass
class AppointmentQuery(PageRequest):
    status: Optional[str] = None
    on_date: Optional[date] = None
    upcoming_after: Optional[datetime] = None


@dataclass
class ConsultationQuery(PageRequest):
    status: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    sort_by: str = "date-desc"


@dataclass
class ContactQuery(PageRequest):
    status: Optional[str] = None
    priority: Optional[str] = None
    inquiry_type: Optional[str] = None
    assigned_to: Optional[str] = None
    search: Optional[str] = None


@dataclass
class PaymentQuery(PageRequest):
    status: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


@dataclass
class DoctorStats:
    total_doctors: int = 0
    verified_doctors: int = 0
    average_experience: float = 0
    average_rating: float = 0
    total_consultations: int = 0
    specializations: List[str] = field(default_factory=list)


@dataclass
class ConsultationStats:
    total_consultations: int = 0
    completed_consultations: int = 0
    scheduled_consultations: int = 0
    cancelled_consultations: int = 0
    total_revenue: float = 0
    average_consultation_fee: float = 0
    average_rating: Optional[float] = None


@dataclass
class ContactStats:
    total_inquiries: int = 0
    new_inquiries: int = 0
    in_progress_inquiries: int = 0
    resolved_inquiries: int = 0
    high_priority_inquiries: int = 0
    average_resolution_time: Optional[float] = None
    inquiry_types: List[str] = field(default_factory=list)
    pending_inquiries: int = 0

    @property
    def resolution_rate(self) -> float:
        """Percentage of inquiries resolved, two decimals."""
        if not self.total_inquiries:
            return 0
        return round(self.resolved_inquiries / self.total_inquiries * 100, 2)


@dataclass
class EarningsSummary:
    total_gross_earnings: float = 0
    total_platform_commission: float = 0
    total_net_earnings: float = 0
    total_transactions: int = 0
    average_transaction_value: float = 0
    pending_settlement: float = 0
