"""Contact inquiry use cases: submission and the support desk workflow."""

import logging
from typing import Optional

from ...domain.entities.contact import Contact
from ...domain.enums.contact import InquiryPriority, InquiryStatus
from ...domain.errors import ContactNotFoundError, InvalidStatusError
from ..dto.contact_dto import SubmitContactRequest, SubmitContactResult
from ..ports.repositories.contact_repo import ContactRepository

logger = logging.getLogger("amrutam")

VALID_STATUSES = {s.value for s in InquiryStatus}

AUTO_RESPONSE_TEMPLATE = """Dear {name},

Thank you for contacting Amrutam Doctor Portal. We have received your message and will get back to you within {response_time}.

Your inquiry ID: {inquiry_id}
Subject: {subject}

Best regards,
Amrutam Support Team"""


def estimated_response_time(priority: str) -> str:
    if priority in (InquiryPriority.HIGH, InquiryPriority.URGENT):
        return "4-8 hours"
    return "24-48 hours"


async def _load(repository: ContactRepository, contact_id: str) -> Contact:
    contact = await repository.find_by_id(contact_id)
    if not contact:
        raise ContactNotFoundError(contact_id)
    return contact


class SubmitContactUseCase:
    """Record a website inquiry and prepare the acknowledgement."""

    def __init__(self, contact_repository: ContactRepository):
        self._contact_repository = contact_repository

    async def execute(self, request: SubmitContactRequest) -> SubmitContactResult:
        contact = Contact(
            name=request.name.strip(),
            email=request.email,
            phone=request.phone.strip(),
            subject=request.subject.strip() if request.subject else None,
            message=request.message.strip(),
            inquiry_type=request.inquiry_type,
            priority=Contact.priority_for(request.inquiry_type),
            user_agent=request.user_agent,
            ip_address=request.ip_address,
            referrer_page=request.referrer_page,
            source=request.source,
        )
        contact = await self._contact_repository.save(contact)

        response_time = estimated_response_time(contact.priority)
        # Email delivery is out of scope; the text is returned to the caller
        auto_response = AUTO_RESPONSE_TEMPLATE.format(
            name=contact.name,
            response_time=response_time,
            inquiry_id=contact.id,
            subject=contact.subject or "General Inquiry",
        )
        logger.info(
            f"Contact inquiry received: id={contact.id} type={contact.inquiry_type} "
            f"priority={contact.priority}"
        )
        return SubmitContactResult(
            contact=contact,
            estimated_response_time=response_time,
            auto_response=auto_response,
        )


class UpdateContactStatusUseCase:
    def __init__(self, contact_repository: ContactRepository):
        self._contact_repository = contact_repository

    async def execute(
        self,
        contact_id: str,
        status: Optional[str] = None,
        assigned_to: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Contact:
        contact = await _load(self._contact_repository, contact_id)
        if status and status not in VALID_STATUSES:
            raise InvalidStatusError(status)

        if status:
            contact.set_status(status)
        if assigned_to:
            contact.assign(assigned_to)
        if notes:
            contact.add_internal_note(notes, "system")
        return await self._contact_repository.save(contact)


class RespondToContactUseCase:
    def __init__(self, contact_repository: ContactRepository):
        self._contact_repository = contact_repository

    async def execute(self, contact_id: str, message: str, responded_by: str = "Support Team") -> Contact:
        contact = await _load(self._contact_repository, contact_id)
        contact.respond(message, responded_by)
        contact = await self._contact_repository.save(contact)
        logger.info(f"Contact inquiry answered: id={contact.id} response_time={contact.response_time}h")
        return contact


class ResolveContactUseCase:
    def __init__(self, contact_repository: ContactRepository):
        self._contact_repository = contact_repository

    async def execute(self, contact_id: str, resolution_summary: str) -> Contact:
        contact = await _load(self._contact_repository, contact_id)
        contact.resolve(resolution_summary)
        contact = await self._contact_repository.save(contact)
        logger.info(f"Contact inquiry resolved: id={contact.id}")
        return contact
