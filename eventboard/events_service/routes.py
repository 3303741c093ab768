"""
Events service routes: create, read, update and delete events.
"""

import logging
from typing import Tuple, Dict, Any

from flask import Blueprint, request, Response

from eventboard.common.errors import NotFoundError, ValidationError
from eventboard.common.responses import success
from eventboard.common.validation import (
    EVENT_UPDATABLE_FIELDS,
    json_object,
    pick_fields,
    required_fields,
    validate_event_updates,
)
from eventboard.database.db_connection import get_db
from eventboard.events_service.models import EventStore

events_bp = Blueprint("events", __name__)

REQUIRED_EVENT_FIELDS = ("title", "description", "date")


def get_event_store() -> EventStore:
    return EventStore(get_db())


@events_bp.before_request
def before_request() -> None:
    logging.info(f"[Events] Incoming {request.method} {request.path}")


@events_bp.after_request
def after_request(response: Response) -> Response:
    logging.info(f"[Events] Response {response.status}")
    return response


@events_bp.route("", methods=["GET"])
def list_events() -> Tuple[Response, int]:
    """
    Return all events ordered by date, soonest first.
    """
    return success("Events retrieved successfully", events=get_event_store().list_all())


@events_bp.route("/<int:event_id>", methods=["GET"])
def get_event(event_id: int) -> Tuple[Response, int]:
    """
    Get a single event by ID.

    Returns:
        200: Event object.
        404: Event not found.
    """
    event = get_event_store().find_by_id(event_id)
    if not event:
        raise NotFoundError("Event not found")
    return success("Event retrieved successfully", event=event)


@events_bp.route("", methods=["POST"])
def create_event() -> Tuple[Response, int]:
    """
    Create an event.

    Expects a JSON body with:
    - title (str)
    - description (str)
    - date (str): ISO-8601 timestamp, stored as given.
    - location (str, optional)

    Returns:
        201: The created event with its assigned id.
        400: A required field is missing or blank.
    """
    data: Dict[str, Any] = json_object(request.get_json(silent=True))

    errors = required_fields(data, REQUIRED_EVENT_FIELDS)
    location = data.get("location") or ""
    if not isinstance(location, str):
        errors.append("Location must be a string")
    if errors:
        raise ValidationError("Validation failed", errors)

    event = get_event_store().insert(data["title"], data["description"], data["date"], location)
    return success("Event created successfully", 201, event=event)


@events_bp.route("/<int:event_id>", methods=["PUT"])
def update_event(event_id: int) -> Tuple[Response, int]:
    """
    Update any subset of title, description, date and location.
    Keys outside that set are ignored; an empty body leaves the event as is.

    Returns:
        200: The updated event.
        400: A provided field is blank or not a string.
        404: Event not found.
    """
    data: Dict[str, Any] = json_object(request.get_json(silent=True))
    fields = pick_fields(data, EVENT_UPDATABLE_FIELDS)

    errors = validate_event_updates(fields)
    if errors:
        raise ValidationError("Validation failed", errors)

    event = get_event_store().update(event_id, fields)
    if not event:
        raise NotFoundError("Event not found")

    return success("Event updated successfully", event=event)


@events_bp.route("/<int:event_id>", methods=["DELETE"])
def delete_event(event_id: int) -> Tuple[Response, int]:
    """
    Delete an event. Deleting it a second time returns 404.
    """
    if not get_event_store().delete(event_id):
        raise NotFoundError("Event not found")
    return success("Event deleted successfully")
