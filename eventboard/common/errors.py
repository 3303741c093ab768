"""
Error taxonomy for the API and the Flask handlers that render it.

Stores report "not found" with None/False return values. The exceptions
below are for conditions that have to cross a layer boundary, such as a
duplicate email detected by the database.
"""

import logging
from typing import List, Optional

from flask import Flask
from werkzeug.exceptions import HTTPException

from eventboard.common.responses import failure


class ApiError(Exception):
    """Base class for errors that map onto a response status."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ApiError):
    """Missing, blank or malformed input."""

    status_code = 400

    def __init__(self, message: str = "Validation failed", errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []


class AuthenticationError(ApiError):
    status_code = 401


class NotFoundError(ApiError):
    status_code = 404


class ConflictError(ApiError):
    """A unique key (user email) is already taken."""

    status_code = 409


class UnexpectedError(ApiError):
    status_code = 500


def register_error_handlers(app: Flask) -> None:
    """
    Render errors that escape a handler as envelopes instead of HTML pages.
    """

    @app.errorhandler(ApiError)
    def handle_api_error(err: ApiError):
        errors = getattr(err, "errors", None)
        return failure(err.message, err.status_code, errors=errors)

    @app.errorhandler(HTTPException)
    def handle_http_error(err: HTTPException):
        response, status = failure(err.description or err.name, err.code or 500)
        # 405 replies must keep werkzeug's Allow header
        for name, value in err.get_headers():
            if name.lower() == "allow":
                response.headers[name] = value
        return response, status

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        logging.exception("Unhandled error")
        return failure("Internal server error", UnexpectedError.status_code, error=str(err))
