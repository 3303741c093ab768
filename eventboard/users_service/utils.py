"""
Shared authentication helpers.
Provides password hashing, token creation, token verification and
Authorization header parsing.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Tuple, Optional, Dict, Any

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import VerificationError, InvalidHashError
from flask import request, Response

from eventboard import config
from eventboard.common.responses import failure

ph = PasswordHasher()

BEARER_PREFIX = "Bearer "


# --- PASSWORDS ---
def hash_password(password: str) -> str:
    """
    Hash a plaintext password with Argon2.

    A fresh random salt is used on every call, so hashing the same password
    twice gives two different digests that both verify.
    """
    return ph.hash(password)


def verify_password(password: str, digest: Optional[str]) -> bool:
    """
    Check a plaintext password against a stored Argon2 digest.

    Returns:
        bool: True on a match. False on a mismatch or a malformed digest.
    """
    if not isinstance(digest, str) or not digest:
        return False
    try:
        return ph.verify(digest, password)
    except (VerificationError, InvalidHashError, UnicodeError):
        return False


# --- JWT CREATION ---
def create_token(user_id: int, email: str) -> str:
    """
    Generates a new JWT for a given user.

    Args:
        user_id (int): The unique ID of the user.
        email (str): The user's email address.

    Returns:
        str: Encoded JWT string.
    """
    now = datetime.now(timezone.utc)

    payload = {
        "sub": str(user_id),  # PyJWT requires a string subject
        "email": email,
        "exp": now + timedelta(minutes=config.TOKEN_EXPIRATION_MINUTES),
        "iat": now
    }

    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


# --- JWT VALIDATION ---
def verify_token(token: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Validate a JWT's signature and expiry.

    Args:
        token (str): JWT string.

    Returns:
        dict: {"user_id": int, "email": str} if valid, None otherwise.
    """
    if not token:
        return None
    try:
        payload = jwt.decode(
            token,
            config.JWT_SECRET,
            algorithms=[config.JWT_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
        return {"user_id": int(payload["sub"]), "email": payload.get("email")}
    except jwt.ExpiredSignatureError:
        logging.info("[Auth] Rejected expired token")
        return None
    except (jwt.InvalidTokenError, ValueError, TypeError):
        return None


def extract_token_from_header(header: Optional[str]) -> Optional[str]:
    """
    Pull the token out of an `Authorization: Bearer <token>` header value.

    The prefix is matched exactly (case-sensitive, one space).
    """
    if not header or not header.startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX):]
    return token or None


def verify_token_from_request() -> Tuple[Optional[Dict[str, Any]], Optional[Response], Optional[int]]:
    """
    Verify the JWT in the Authorization header of the current request.

    Returns:
        tuple: (payload, error_response, status_code)
               If successful, error_response and status_code are None.
               If failed, payload is None.
    """
    token = extract_token_from_header(request.headers.get("Authorization"))
    if token is None:
        err, code = failure("Missing token", 401)
        return None, err, code

    payload = verify_token(token)
    if payload is None:
        err, code = failure("Invalid or expired token", 401)
        return None, err, code

    return payload, None, None
