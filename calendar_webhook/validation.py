from typing import Any

from .errors import ValidationError
from .models import AppointmentEvent, is_blank, normalize_event

SCHEDULE_APPOINTMENT = "schedule_appointment"

MISSING_EVENT_OR_DATA = "Missing event or data"
UNSUPPORTED_EVENT = "Unsupported event type"
MISSING_REQUIRED_FIELDS = "Missing required fields"


def validate_payload(body: Any) -> dict:
    """
    Presence checks only. Returns the `data` object on success.
    Field values are not type- or format-checked (the email is never
    inspected, the date is never parsed).
    """
    if not isinstance(body, dict):
        raise ValidationError(MISSING_EVENT_OR_DATA)

    event = body.get("event")
    data = body.get("data")
    if is_blank(event) or is_blank(data):
        raise ValidationError(MISSING_EVENT_OR_DATA)

    if event != SCHEDULE_APPOINTMENT:
        raise ValidationError(UNSUPPORTED_EVENT)

    if not isinstance(data, dict) or is_blank(data.get("name")) or is_blank(data.get("email")):
        raise ValidationError(MISSING_REQUIRED_FIELDS)

    return data


def parse_appointment(body: Any) -> AppointmentEvent:
    return normalize_event(validate_payload(body))
