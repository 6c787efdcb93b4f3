"""
MongoDB implementation of PaymentRepository.
"""

from dataclasses import asdict
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import pymongo

from amrutam.application.dto.queries import EarningsSummary, PaymentQuery
from amrutam.application.ports.repositories.payment_repo import PaymentRepository
from amrutam.domain.entities.payment import (
    BillingAddress,
    CardDetails,
    DoctorEarning,
    Payment,
    Refund,
    Taxes,
    UpiDetails,
)
from amrutam.domain.enums.payment import PaymentStatus, SettlementStatus
from ..ids import to_object_id, to_str_id
from ..models.payment_m import (
    BillingAddressMongo,
    CardDetailsMongo,
    DoctorEarningMongo,
    PaymentMongo,
    RefundMongo,
    TaxesMongo,
    UpiDetailsMongo,
)

LATEST_FIRST = [("payment_date", pymongo.DESCENDING), ("created_at", pymongo.DESCENDING)]


class MongoPaymentRepository(PaymentRepository):
    """MongoDB implementation of PaymentRepository."""

    async def save(self, payment: Payment) -> Payment:
        payment_mongo = self._domain_to_mongo(payment)
        if payment_mongo.id is None:
            await payment_mongo.insert()
        else:
            await payment_mongo.save()
        return self._mongo_to_domain(payment_mongo)

    async def find_by_transaction_id(self, transaction_id: str) -> Optional[Payment]:
        payment_mongo = await PaymentMongo.find_one(PaymentMongo.transaction_id == transaction_id)
        return self._mongo_to_domain(payment_mongo) if payment_mongo else None

    async def find_by_doctor(self, doctor_id: str, query: PaymentQuery) -> Tuple[List[Payment], int]:
        object_id = to_object_id(doctor_id)
        if object_id is None:
            return [], 0

        filters: Dict[str, Any] = {"doctor_id": object_id}
        if query.status:
            filters["status"] = query.status
        if query.start_date or query.end_date:
            bounds: Dict[str, Any] = {}
            if query.start_date:
                bounds["$gte"] = query.start_date
            if query.end_date:
                bounds["$lte"] = query.end_date
            filters["payment_date"] = bounds

        cursor = PaymentMongo.find(filters).sort(LATEST_FIRST)
        docs = await cursor.skip(query.offset).limit(query.limit).to_list()
        total = await PaymentMongo.find(filters).count()
        return [self._mongo_to_domain(doc) for doc in docs], total

    async def find_by_patient(
        self, email: str, status: Optional[str], page: int, limit: int
    ) -> Tuple[List[Payment], int]:
        filters: Dict[str, Any] = {"patient_email": email.strip().lower()}
        if status:
            filters["status"] = status
        offset = (max(page, 1) - 1) * limit
        docs = await PaymentMongo.find(filters).sort(LATEST_FIRST).skip(offset).limit(limit).to_list()
        total = await PaymentMongo.find(filters).count()
        return [self._mongo_to_domain(doc) for doc in docs], total

    async def earnings_summary(
        self, doctor_id: str, start_date: datetime, end_date: datetime
    ) -> EarningsSummary:
        object_id = to_object_id(doctor_id)
        if object_id is None:
            return EarningsSummary()
        pipeline = [
            {
                "$match": {
                    "doctor_id": object_id,
                    "status": PaymentStatus.COMPLETED.value,
                    "payment_date": {"$gte": start_date, "$lte": end_date},
                }
            },
            {
                "$group": {
                    "_id": None,
                    "gross": {"$sum": "$doctor_earning.gross_amount"},
                    "commission": {"$sum": "$doctor_earning.platform_commission"},
                    "net": {"$sum": "$doctor_earning.net_amount"},
                    "transactions": {"$sum": 1},
                    "average_value": {"$avg": "$amount"},
                }
            },
        ]
        result = await PaymentMongo.aggregate(pipeline).to_list()
        if not result:
            return EarningsSummary()
        row = result[0]
        return EarningsSummary(
            total_gross_earnings=row["gross"],
            total_platform_commission=row["commission"],
            total_net_earnings=row["net"],
            total_transactions=row["transactions"],
            average_transaction_value=row["average_value"] or 0,
        )

    async def pending_settlement(self, doctor_id: str) -> float:
        object_id = to_object_id(doctor_id)
        if object_id is None:
            return 0
        pipeline = [
            {
                "$match": {
                    "doctor_id": object_id,
                    "status": PaymentStatus.COMPLETED.value,
                    "settlement_status": SettlementStatus.PENDING.value,
                }
            },
            {"$group": {"_id": None, "total_pending": {"$sum": "$doctor_earning.net_amount"}}},
        ]
        result = await PaymentMongo.aggregate(pipeline).to_list()
        return result[0]["total_pending"] if result else 0

    def _domain_to_mongo(self, payment: Payment) -> PaymentMongo:
        """Convert domain entity to MongoDB model."""
        fields = asdict(payment)
        fields.pop("id")
        fields["doctor_id"] = to_object_id(payment.doctor_id)
        fields["service_id"] = to_object_id(payment.service_id)
        fields["taxes"] = TaxesMongo(**asdict(payment.taxes))
        fields["card_details"] = CardDetailsMongo(**asdict(payment.card_details)) if payment.card_details else None
        fields["upi_details"] = UpiDetailsMongo(**asdict(payment.upi_details)) if payment.upi_details else None
        fields["billing_address"] = (
            BillingAddressMongo(**asdict(payment.billing_address)) if payment.billing_address else None
        )
        fields["refunds"] = [RefundMongo(**asdict(r)) for r in payment.refunds]
        fields["doctor_earning"] = DoctorEarningMongo(**asdict(payment.doctor_earning))
        return PaymentMongo(id=to_object_id(payment.id), **fields)

    def _mongo_to_domain(self, payment_mongo: PaymentMongo) -> Payment:
        """Convert MongoDB model to domain entity."""
        fields = payment_mongo.model_dump(exclude={"id", "revision_id"})
        fields["doctor_id"] = to_str_id(payment_mongo.doctor_id)
        fields["service_id"] = to_str_id(payment_mongo.service_id)
        fields["taxes"] = Taxes(**fields["taxes"])
        fields["card_details"] = CardDetails(**fields["card_details"]) if fields["card_details"] else None
        fields["upi_details"] = UpiDetails(**fields["upi_details"]) if fields["upi_details"] else None
        fields["billing_address"] = (
            BillingAddress(**fields["billing_address"]) if fields["billing_address"] else None
        )
        fields["refunds"] = [Refund(**r) for r in fields["refunds"]]
        fields["doctor_earning"] = DoctorEarning(**fields["doctor_earning"])
        return Payment(id=to_str_id(payment_mongo.id), **fields)
