"""
Authentication helpers: password hashing and bearer tokens for doctors.

Tokens are signed JWTs carrying the doctor id. Most routes do not require
one; only the doctor's own profile endpoints do.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from jose import JWTError, jwt

from .config import SecuritySettings, get_settings

logger = logging.getLogger("amrutam")

# bcrypt only looks at the first 72 bytes of a secret
MAX_PASSWORD_BYTES = 72


class TokenError(Exception):
    """Raised when a bearer token cannot be decoded or is missing claims."""


def _security() -> SecuritySettings:
    return get_settings().security


def get_password_hash(password: str, rounds: Optional[int] = None) -> str:
    raw = password.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=rounds or _security().bcrypt_rounds)
    return bcrypt.hashpw(raw, salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    raw = plain_password.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(raw, hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    security = _security()
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=security.access_token_expire_minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, security.secret_key, algorithm=security.algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    security = _security()
    try:
        return jwt.decode(token, security.secret_key, algorithms=[security.algorithm])
    except JWTError as e:
        raise TokenError(str(e)) from e


def create_doctor_token(doctor_id: str) -> str:
    """Issue the login token for a doctor."""
    return create_access_token({"doctorId": doctor_id})


def doctor_id_from_token(token: str) -> str:
    payload = decode_access_token(token)
    doctor_id = payload.get("doctorId")
    if not doctor_id:
        raise TokenError("Token does not identify a doctor")
    return str(doctor_id)
