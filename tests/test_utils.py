"""
Fee arithmetic, reference generation and date helpers.
"""

import re
from datetime import date, datetime, timedelta, timezone

import pytest

from amrutam.application.utils.billing import compute_fee_breakdown, round_half_up
from amrutam.core.config import BillingSettings
from amrutam.core.utils.datetime_utils import day_name, period_start, shift_months, to_naive_utc
from amrutam.core.utils.string_utils import (
    contains_pattern,
    generate_reference,
    validate_hhmm,
    validate_phone_number,
)


@pytest.mark.parametrize("value, expected", [(2.5, 3), (4.5, 5), (4.49, 4), (0, 0), (17.5, 18)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_fee_breakdown_for_500():
    breakdown = compute_fee_breakdown(500, BillingSettings())
    assert breakdown.platform_fee == 25
    assert breakdown.processing_fee == 10
    assert breakdown.gst == 5
    # 2.5 rounds up on each half
    assert breakdown.cgst == 3
    assert breakdown.sgst == 3
    assert breakdown.total_amount == 540


def test_fee_breakdown_for_750():
    breakdown = compute_fee_breakdown(750)
    assert breakdown.platform_fee == 38
    assert breakdown.processing_fee == 15
    assert breakdown.gst == 7
    assert breakdown.total_amount == 810


def test_fee_breakdown_uses_configured_rates():
    settings = BillingSettings(platform_fee_rate=0.1, processing_fee_rate=0, gst_rate=0)
    breakdown = compute_fee_breakdown(1000, settings)
    assert breakdown.platform_fee == 100
    assert breakdown.total_amount == 1100


def test_generate_reference_format():
    reference = generate_reference("TXN", 9, timestamp_ms=1700000000000)
    assert re.fullmatch(r"TXN_1700000000000_[0-9a-z]{9}", reference)
    assert generate_reference("TXN", 9) != generate_reference("TXN", 9)


@pytest.mark.parametrize("phone, valid", [("+919876543210", True), ("9876543210", True), ("98765", False), ("98-765-43210", False)])
def test_validate_phone_number(phone, valid):
    assert validate_phone_number(phone) is valid


@pytest.mark.parametrize("value, valid", [("09:30", True), ("9:30", True), ("23:59", True), ("24:00", False), ("12:60", False)])
def test_validate_hhmm(value, valid):
    assert validate_hhmm(value) is valid


def test_contains_pattern_escapes_regex_syntax():
    pattern = contains_pattern(" dr. (a")
    assert pattern.search("Visit DR. (A Rao)")
    assert not pattern.search("dra")


def test_day_name():
    assert day_name(date(2025, 3, 10)) == "Monday"


def test_shift_months_clamps_day():
    assert shift_months(datetime(2025, 3, 31, 12), -1) == datetime(2025, 2, 28, 12)
    assert shift_months(datetime(2025, 1, 15), -12) == datetime(2024, 1, 15)


def test_period_start():
    end = datetime(2025, 3, 31, 12)
    assert period_start("week", end) == datetime(2025, 3, 24, 12)
    assert period_start("month", end) == datetime(2025, 2, 28, 12)
    assert period_start("year", end) == datetime(2024, 3, 31, 12)
    assert period_start("decade", end) == end


def test_to_naive_utc():
    aware = datetime(2025, 3, 10, 15, 30, tzinfo=timezone(timedelta(hours=5, minutes=30)))
    assert to_naive_utc(aware) == datetime(2025, 3, 10, 10, 0)
    assert to_naive_utc(None) is None
