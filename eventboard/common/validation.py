"""
Input validation helpers shared by the request handlers.

Each helper returns a list of human-readable problems; an empty list means
the input is acceptable.
"""

import re
from typing import Any, Dict, Iterable, List

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PASSWORD_MIN_LENGTH = 6

USER_UPDATABLE_FIELDS = ("email", "name", "password")
EVENT_UPDATABLE_FIELDS = ("title", "description", "date", "location")


def is_blank(value: Any) -> bool:
    """True if value is missing, not a string, or only whitespace."""
    return not isinstance(value, str) or not value.strip()


def normalize_email(email: Any) -> Any:
    """Trim and lower-case an email; non-strings pass through for the validators to reject."""
    if isinstance(email, str):
        return email.strip().lower()
    return email


def validate_email(email: Any) -> bool:
    return isinstance(email, str) and bool(EMAIL_PATTERN.match(email))


def validate_password(password: Any) -> bool:
    return isinstance(password, str) and len(password) >= PASSWORD_MIN_LENGTH


def required_fields(data: Dict[str, Any], names: Iterable[str]) -> List[str]:
    """Report every required field that is missing or blank."""
    return [f"{name.capitalize()} is required" for name in names if is_blank(data.get(name))]


def validate_user_data(email: Any, password: Any) -> List[str]:
    """Signup checks: email present and well formed, password present and long enough."""
    errors = []

    if is_blank(email):
        errors.append("Email is required")
    elif not validate_email(email):
        errors.append("Invalid email format")

    if is_blank(password):
        errors.append("Password is required")
    elif not validate_password(password):
        errors.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")

    return errors


def pick_fields(data: Dict[str, Any], allowed: Iterable[str]) -> Dict[str, Any]:
    """Keep only allow-listed keys; everything else is dropped silently."""
    return {k: data[k] for k in allowed if k in data}


def validate_user_updates(fields: Dict[str, Any]) -> List[str]:
    errors = []
    if "email" in fields and not validate_email(fields["email"]):
        errors.append("Invalid email format")
    if "password" in fields and not validate_password(fields["password"]):
        errors.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
    if "name" in fields and not isinstance(fields["name"], str):
        errors.append("Name must be a string")
    return errors


def validate_event_updates(fields: Dict[str, Any]) -> List[str]:
    errors = [
        f"{name.capitalize()} cannot be empty"
        for name in ("title", "description", "date")
        if name in fields and is_blank(fields[name])
    ]
    if "location" in fields and not isinstance(fields["location"], str):
        errors.append("Location must be a string")
    return errors


def json_object(payload: Any) -> Dict[str, Any]:
    """Request bodies that are not JSON objects are treated as empty."""
    return payload if isinstance(payload, dict) else {}
