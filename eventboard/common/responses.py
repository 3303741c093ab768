"""
Uniform JSON envelope used by every endpoint:

    { success, message, <resource key>?, errors?, error? }
"""

from typing import Any, List, Optional, Tuple

from flask import jsonify, Response


def success(message: str, status: int = 200, **resources: Any) -> Tuple[Response, int]:
    """
    Build a success envelope.

    Keyword arguments become top-level resource keys, e.g.
    `success("Login successful", user=user, token=token)`.
    """
    body = {"success": True, "message": message}
    body.update(resources)
    return jsonify(body), status


def failure(
    message: str,
    status: int,
    errors: Optional[List[str]] = None,
    error: Optional[str] = None,
) -> Tuple[Response, int]:
    """Build a failure envelope with an optional itemized `errors` list or raw `error` text."""
    body = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    if error is not None:
        body["error"] = error
    return jsonify(body), status
