"""
String utility functions for the doctor portal.
"""

import re
import secrets
import string
import time
from typing import Optional

PHONE_PATTERN = re.compile(r"^\+?[0-9]{10,15}$")
HHMM_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")

_BASE36 = string.digits + string.ascii_lowercase


def random_token(length: int) -> str:
    """Random lowercase alphanumeric string."""
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def generate_reference(prefix: str, random_length: int, timestamp_ms: Optional[int] = None) -> str:
    """Build a reference such as ``TXN_1700000000000_k3j9x0a1b``."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{prefix}_{timestamp_ms}_{random_token(random_length)}"


def validate_phone_number(phone: str) -> bool:
    """Validate phone number format (optional leading +, 10-15 digits)."""
    return bool(PHONE_PATTERN.match(phone or ""))


def validate_hhmm(value: str) -> bool:
    """Validate a 24-hour 'HH:MM' clock string."""
    return bool(HHMM_PATTERN.match(value or ""))


def contains_pattern(text: str) -> re.Pattern:
    """Case-insensitive 'contains' pattern for user supplied search text."""
    return re.compile(re.escape(text.strip()), re.IGNORECASE)
