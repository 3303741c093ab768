"""
Users service route handlers.

Provides routes for:
- Signup
- Login (returns a JWT)
- Profile retrieval, update and deletion (/me)
- User listing

Token and password logic lives in `users_service.utils`.
"""

import logging
from typing import Tuple, Dict, Any

from flask import Blueprint, request, Response

from eventboard.common.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from eventboard.common.responses import success
from eventboard.common.validation import (
    USER_UPDATABLE_FIELDS,
    is_blank,
    json_object,
    normalize_email,
    pick_fields,
    validate_user_data,
    validate_user_updates,
)
from eventboard.database.db_connection import get_db
from eventboard.users_service.models import UserStore, without_password
from eventboard.users_service.utils import create_token, verify_password, verify_token_from_request

users_bp = Blueprint("users", __name__)

INVALID_CREDENTIALS = "Invalid email or password"


def get_user_store() -> UserStore:
    return UserStore(get_db())


# --- REQUEST LOGGING ---
@users_bp.before_request
def before_request() -> None:
    """
    Log the method and path of every request to the users service.
    """
    logging.info(f"[Users] Incoming {request.method} {request.path}")


@users_bp.after_request
def after_request(response: Response) -> Response:
    """
    Log the response status code for every request.

    Args:
        response (Response): The Flask response object.

    Returns:
        Response: The passed-through response object.
    """
    logging.info(f"[Users] Response {response.status}")
    return response


# --- SIGNUP ---
@users_bp.route("/signup", methods=["POST"])
def signup() -> Tuple[Response, int]:
    """
    Register a new user.

    Expects a JSON body with:
    - email (str): Unique email address.
    - password (str): Minimum 6 characters.
    - name (str, optional)

    Returns:
        201: Created user (password omitted).
        400: Missing or invalid fields.
        409: Email already registered.
    """
    data: Dict[str, Any] = json_object(request.get_json(silent=True))
    email = normalize_email(data.get("email"))
    password = data.get("password")
    name = data.get("name") or ""

    errors = validate_user_data(email, password)
    if not isinstance(name, str):
        errors.append("Name must be a string")
    if errors:
        raise ValidationError("Validation failed", errors)

    store = get_user_store()
    if store.find_by_email(email):
        raise ConflictError("User with this email already exists")

    user = store.insert(email, password, name)
    return success("User created successfully", 201, user=user)


# --- LOGIN ---
@users_bp.route("/login", methods=["POST"])
def login() -> Tuple[Response, int]:
    """
    Authenticate a user and return a JWT.

    Expects a JSON body with:
    - email (str)
    - password (str)

    Returns:
        200: User (password omitted) and token.
        400: Missing credentials.
        401: Unknown email or wrong password (same message for both).
    """
    data: Dict[str, Any] = json_object(request.get_json(silent=True))
    email = normalize_email(data.get("email"))
    password = data.get("password")

    if is_blank(email) or is_blank(password):
        raise ValidationError("Email and password are required")

    user = get_user_store().find_by_email(email)

    # Same message for unknown email and wrong password
    if not user or not verify_password(password, user["password"]):
        raise AuthenticationError(INVALID_CREDENTIALS)

    token = create_token(user["id"], user["email"])
    return success("Login successful", user=without_password(user), token=token)


# --- LIST USERS ---
@users_bp.route("", methods=["GET"])
def list_users() -> Tuple[Response, int]:
    """
    List every user. Requires Authorization header: Bearer <token>

    Returns:
        200: List of users (passwords omitted).
        401: Authentication failure.
    """
    _, err, code = verify_token_from_request()
    if err:
        return err, code

    return success("Users retrieved successfully", users=get_user_store().list_all())


# --- GET CURRENT USER ---
@users_bp.route("/me", methods=["GET"])
def get_current_user() -> Tuple[Response, int]:
    """
    Retrieve the caller's profile.

    Returns:
        200: User object.
        401: Authentication failure.
        404: The account behind the token no longer exists.
    """
    payload, err, code = verify_token_from_request()
    if err:
        return err, code

    user = get_user_store().find_by_id(payload["user_id"])
    if not user:
        raise NotFoundError("User not found")

    return success("User retrieved successfully", user=user)


# --- UPDATE CURRENT USER ---
@users_bp.route("/me", methods=["PUT"])
def update_current_user() -> Tuple[Response, int]:
    """
    Update any of email, name and password on the caller's account.
    Other keys in the body are ignored.

    Returns:
        200: Updated user object.
        400: A provided value is invalid.
        401: Authentication failure.
        404: User not found.
        409: New email already taken.
    """
    payload, err, code = verify_token_from_request()
    if err:
        return err, code

    data: Dict[str, Any] = json_object(request.get_json(silent=True))
    fields = pick_fields(data, USER_UPDATABLE_FIELDS)
    if "email" in fields:
        fields["email"] = normalize_email(fields["email"])

    errors = validate_user_updates(fields)
    if errors:
        raise ValidationError("Validation failed", errors)

    user = get_user_store().update(payload["user_id"], fields)
    if not user:
        raise NotFoundError("User not found")

    return success("User updated successfully", user=user)


# --- DELETE CURRENT USER ---
@users_bp.route("/me", methods=["DELETE"])
def delete_current_user() -> Tuple[Response, int]:
    """
    Delete the caller's account permanently.

    Returns:
        200: Deleted.
        401: Authentication failure.
        404: Already gone.
    """
    payload, err, code = verify_token_from_request()
    if err:
        return err, code

    if not get_user_store().delete(payload["user_id"]):
        raise NotFoundError("User not found")

    return success("User deleted successfully")
