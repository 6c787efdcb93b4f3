"""
Fee and tax arithmetic for simulated payments.

Amounts are whole rupees; intermediate fees are rounded half-up.
"""

import math
from dataclasses import dataclass
from typing import Optional

from ...core.config import BillingSettings


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class FeeBreakdown:
    consultation_fee: float
    platform_fee: int
    processing_fee: int
    gst: int
    cgst: int
    sgst: int

    @property
    def total_amount(self) -> float:
        return self.consultation_fee + self.platform_fee + self.processing_fee + self.gst


def compute_fee_breakdown(consultation_fee: float, settings: Optional[BillingSettings] = None) -> FeeBreakdown:
    """Platform and processing fees on the consultation fee, GST on the platform fee.

    GST is split evenly into CGST and SGST, each rounded on its own.
    """
    settings = settings or BillingSettings()
    platform_fee = round_half_up(consultation_fee * settings.platform_fee_rate)
    processing_fee = round_half_up(consultation_fee * settings.processing_fee_rate)
    gst = round_half_up(platform_fee * settings.gst_rate)
    half_gst = round_half_up(gst / 2)
    return FeeBreakdown(
        consultation_fee=consultation_fee,
        platform_fee=platform_fee,
        processing_fee=processing_fee,
        gst=gst,
        cgst=half_gst,
        sgst=half_gst,
    )
