"""Contact inquiry endpoints: public submission and the support desk."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Query, Request, status

from ...application.dto.contact_dto import SubmitContactRequest
from ...application.dto.queries import ContactQuery
from ...application.use_cases.contact_inquiries import (
    ResolveContactUseCase,
    RespondToContactUseCase,
    SubmitContactUseCase,
    UpdateContactStatusUseCase,
)
from ...core.utils.datetime_utils import to_naive_utc
from ...domain.enums.contact import InquiryPriority, InquiryStatus, InquiryType
from ...domain.errors import ContactNotFoundError
from ..deps import ContactRepositoryDep
from ..errors import ValidationError
from ..schemas.common import ApiResponse, ErrorResponse, Pagination
from ..schemas.contact import (
    ContactData,
    ContactDetailSchema,
    ContactListData,
    ContactSchema,
    ContactStatsData,
    ContactStatsSchema,
    ContactSubmissionData,
    PendingContactSchema,
    PendingContactsData,
    RespondContactSchema,
    ResolveContactSchema,
    SubmitContactSchema,
    UpdateContactStatusSchema,
    contact_view,
)
from ..utils.responses import ok

router = APIRouter(prefix="/contact", tags=["contact"])


def _contact_data(contact) -> ContactData:
    return ContactData(contact=contact_view(ContactDetailSchema, contact))


@router.post(
    "",
    response_model=ApiResponse[ContactSubmissionData],
    status_code=status.HTTP_201_CREATED,
    summary="Submit a contact inquiry",
    responses={400: {"model": ErrorResponse, "description": "Missing required fields"}},
)
@router.post(
    "/", response_model=ApiResponse[ContactSubmissionData], status_code=status.HTTP_201_CREATED, include_in_schema=False
)
async def submit_contact(http_request: Request, request: SubmitContactSchema, contact_repo: ContactRepositoryDep):
    if not (request.name and request.email and request.phone and request.message):
        raise ValidationError("Please provide all required fields: name, email, phone, and message")

    dto = SubmitContactRequest(
        name=request.name,
        email=str(request.email),
        phone=request.phone,
        message=request.message,
        subject=request.subject,
        inquiry_type=request.inquiry_type,
        source=request.source,
        user_agent=http_request.headers.get("user-agent"),
        ip_address=http_request.client.host if http_request.client else None,
        referrer_page=http_request.headers.get("referer"),
    )
    result = await SubmitContactUseCase(contact_repo).execute(dto)
    contact = result.contact
    data = ContactSubmissionData(
        inquiry_id=contact.id,
        name=contact.name,
        email=contact.email,
        inquiry_type=contact.inquiry_type,
        priority=contact.priority,
        estimated_response_time=result.estimated_response_time,
        auto_response=result.auto_response,
    )
    return ok(data, message="Your message has been sent successfully. We will get back to you soon.")


@router.get("", response_model=ApiResponse[ContactListData], summary="List contact inquiries")
@router.get("/", response_model=ApiResponse[ContactListData], include_in_schema=False)
async def list_contacts(
    contact_repo: ContactRepositoryDep,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: Optional[InquiryStatus] = Query(None),
    priority: Optional[InquiryPriority] = Query(None),
    inquiry_type: Optional[InquiryType] = Query(None, alias="inquiryType"),
    assigned_to: Optional[str] = Query(None, alias="assignedTo"),
    search: Optional[str] = Query(None),
):
    query = ContactQuery(
        page=page,
        limit=limit,
        status=status.value if status else None,
        priority=priority.value if priority else None,
        inquiry_type=inquiry_type.value if inquiry_type else None,
        assigned_to=assigned_to,
        search=search or None,
    )
    contacts, total = await contact_repo.find_all(query)
    return ok(
        ContactListData(
            contacts=[contact_view(ContactSchema, c) for c in contacts],
            pagination=Pagination.build(page, limit, total),
        )
    )


@router.get("/pending", response_model=ApiResponse[PendingContactsData], summary="Open inquiries by priority")
async def pending_contacts(contact_repo: ContactRepositoryDep, limit: int = Query(50, ge=1, le=200)):
    contacts = await contact_repo.find_pending(limit)
    return ok(
        PendingContactsData(
            pending_inquiries=[contact_view(PendingContactSchema, c) for c in contacts],
            count=len(contacts),
        )
    )


@router.get("/stats/summary", response_model=ApiResponse[ContactStatsData], summary="Inquiry statistics")
async def contact_stats(
    contact_repo: ContactRepositoryDep,
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
):
    stats = await contact_repo.stats(to_naive_utc(start_date), to_naive_utc(end_date))
    return ok(ContactStatsData(summary=ContactStatsSchema.model_validate(stats)))


@router.get(
    "/{contact_id}",
    response_model=ApiResponse[ContactData],
    summary="One contact inquiry",
    responses={404: {"model": ErrorResponse, "description": "Contact inquiry not found"}},
)
async def get_contact(contact_id: str, contact_repo: ContactRepositoryDep):
    contact = await contact_repo.find_by_id(contact_id)
    if not contact:
        raise ContactNotFoundError(contact_id)
    return ok(_contact_data(contact))


@router.put(
    "/{contact_id}/status",
    response_model=ApiResponse[ContactData],
    summary="Change status, assignee or add an internal note",
)
async def update_contact_status(
    contact_id: str,
    request: UpdateContactStatusSchema,
    contact_repo: ContactRepositoryDep,
):
    contact = await UpdateContactStatusUseCase(contact_repo).execute(
        contact_id, request.status, request.assigned_to, request.notes
    )
    return ok(_contact_data(contact), message="Contact inquiry status updated successfully")


@router.post(
    "/{contact_id}/respond",
    response_model=ApiResponse[ContactData],
    summary="Answer an inquiry",
)
async def respond_to_contact(
    contact_id: str,
    request: RespondContactSchema,
    contact_repo: ContactRepositoryDep,
):
    if not request.message or not request.message.strip():
        raise ValidationError("Response message is required")
    contact = await RespondToContactUseCase(contact_repo).execute(
        contact_id, request.message.strip(), request.responded_by
    )
    return ok(_contact_data(contact), message="Response sent successfully")


@router.put(
    "/{contact_id}/resolve",
    response_model=ApiResponse[ContactData],
    summary="Resolve an inquiry",
)
async def resolve_contact(
    contact_id: str,
    request: ResolveContactSchema,
    contact_repo: ContactRepositoryDep,
):
    if not request.resolution_summary or not request.resolution_summary.strip():
        raise ValidationError("Resolution summary is required")
    contact = await ResolveContactUseCase(contact_repo).execute(contact_id, request.resolution_summary.strip())
    return ok(_contact_data(contact), message="Contact inquiry resolved successfully")
