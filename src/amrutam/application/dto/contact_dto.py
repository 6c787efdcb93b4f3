"""Contact inquiry DTOs for use case communication."""

from dataclasses import dataclass
from typing import Optional

from ...domain.entities.contact import Contact


@dataclass
class SubmitContactRequest:
    name: str
    email: str
    phone: str
    message: str
    subject: Optional[str] = None
    inquiry_type: str = "general"
    source: str = "website"
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None
    referrer_page: Optional[str] = None


@dataclass
class SubmitContactResult:
    contact: Contact
    estimated_response_time: str
    auto_response: str
