"""MongoDB Beanie model for Payment documents."""

from datetime import datetime
from typing import Any, Dict, List, Optional

import pymongo
from beanie import Document, Indexed, PydanticObjectId
from pydantic import BaseModel, Field

from amrutam.core.utils.datetime_utils import utc_now


class TaxesMongo(BaseModel):
    gst: float = 0
    cgst: float = 0
    sgst: float = 0
    igst: float = 0


class CardDetailsMongo(BaseModel):
    last4_digits: Optional[str] = Field(None, max_length=4)
    card_type: Optional[str] = None
    bank: Optional[str] = None


class UpiDetailsMongo(BaseModel):
    vpa: Optional[str] = None
    upi_transaction_id: Optional[str] = None


class BillingAddressMongo(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    country: str = "India"


class RefundMongo(BaseModel):
    refund_id: Optional[str] = None
    amount: float = Field(..., ge=0)
    reason: Optional[str] = None
    status: str = "initiated"
    initiated_by: str = "admin"
    processed_at: Optional[datetime] = None
    gateway_refund_id: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)


class DoctorEarningMongo(BaseModel):
    gross_amount: Optional[float] = None
    platform_commission: Optional[float] = None
    net_amount: Optional[float] = None
    commission_percentage: Optional[float] = Field(None, ge=0, le=100)


class PaymentMongo(Document):
    """MongoDB model for Payment entity."""

    transaction_id: Indexed(str, unique=True) = Field(..., description="Transaction reference")
    order_id: Optional[str] = None
    doctor_id: PydanticObjectId = Field(..., description="Doctor reference")
    patient_email: str
    patient_name: str
    service_type: str
    service_id: PydanticObjectId
    service_model: str
    amount: float = Field(..., ge=0)
    currency: str = Field(default="INR")
    consultation_fee: float = Field(..., ge=0)
    platform_fee: float = Field(default=0, ge=0)
    processing_fee: float = Field(default=0, ge=0)
    taxes: TaxesMongo = Field(default_factory=TaxesMongo)
    discount_amount: float = Field(default=0, ge=0)
    payment_method: str
    payment_provider: str
    card_details: Optional[CardDetailsMongo] = None
    upi_details: Optional[UpiDetailsMongo] = None
    status: str = Field(default="pending")
    payment_date: Optional[datetime] = None
    gateway_response: Dict[str, Any] = Field(default_factory=dict)
    refunds: List[RefundMongo] = Field(default_factory=list)
    doctor_earning: DoctorEarningMongo = Field(default_factory=DoctorEarningMongo)
    settlement_status: str = Field(default="pending")
    settlement_date: Optional[datetime] = None
    settlement_id: Optional[str] = None
    billing_address: Optional[BillingAddressMongo] = None
    invoice_number: Optional[str] = None
    invoice_url: Optional[str] = None
    reconciled: bool = Field(default=False)
    reconciled_at: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=500)
    metadata: Dict[str, str] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    class Settings:
        name = "payments"
        indexes = [
            [("doctor_id", pymongo.ASCENDING), ("created_at", pymongo.DESCENDING)],
            [("patient_email", pymongo.ASCENDING), ("created_at", pymongo.DESCENDING)],
            [("status", pymongo.ASCENDING), ("payment_date", pymongo.DESCENDING)],
            "settlement_status",
            [("service_id", pymongo.ASCENDING), ("service_model", pymongo.ASCENDING)],
        ]
