"""Doctor earnings reporting and withdrawals."""

import logging
from datetime import datetime
from typing import Optional

from ...core.utils.datetime_utils import period_start, utc_now
from ...core.utils.string_utils import generate_reference
from ...domain.enums.payment import EarningsPeriod
from ...domain.errors import DoctorNotFoundError, InvalidEntityDataError
from ..dto.payment_dto import EarningsReport, WithdrawalRequest, WithdrawalResult
from ..ports.repositories.doctor_repo import DoctorRepository
from ..ports.repositories.payment_repo import PaymentRepository

logger = logging.getLogger("amrutam")


class EarningsSummaryUseCase:
    def __init__(self, payment_repository: PaymentRepository):
        self._payment_repository = payment_repository

    async def execute(
        self,
        doctor_id: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        period: str = EarningsPeriod.MONTH.value,
    ) -> EarningsReport:
        """Summarise completed payments over an explicit range or a trailing period.

        An explicit range needs both ends; otherwise the period ending now is used.
        """
        if start_date and end_date:
            start, end = start_date, end_date
        else:
            end = utc_now()
            start = period_start(period, end)

        summary = await self._payment_repository.earnings_summary(doctor_id, start, end)
        summary.pending_settlement = await self._payment_repository.pending_settlement(doctor_id)
        return EarningsReport(doctor_id=doctor_id, start=start, end=end, summary=summary)


class WithdrawEarningsUseCase:
    """Settle part of a doctor's pending balance (no banking integration)."""

    def __init__(self, doctor_repository: DoctorRepository):
        self._doctor_repository = doctor_repository

    async def execute(self, request: WithdrawalRequest) -> WithdrawalResult:
        doctor = await self._doctor_repository.find_by_id(request.doctor_id)
        if not doctor:
            raise DoctorNotFoundError(request.doctor_id)
        if request.amount <= 0:
            raise InvalidEntityDataError("amount", "must be greater than 0")

        remaining = doctor.withdraw(request.amount)
        if request.bank_details:
            doctor.bank_details = request.bank_details
        await self._doctor_repository.save(doctor)

        withdrawal_id = generate_reference("WD", 6)
        logger.info(
            f"Withdrawal processed: id={withdrawal_id} doctor_id={doctor.id} "
            f"amount={request.amount} remaining={remaining}"
        )
        return WithdrawalResult(
            withdrawal_id=withdrawal_id,
            amount=request.amount,
            status="processed",
            processed_at=utc_now(),
            remaining_balance=remaining,
        )
