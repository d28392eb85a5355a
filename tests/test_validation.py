"""Payload validation and default filling."""

import datetime

import pytest

from calendar_webhook.errors import ValidationError
from calendar_webhook.models import normalize_event, utc_today
from calendar_webhook.validation import parse_appointment, validate_payload


def _payload(**data):
    return {"event": "schedule_appointment", "data": data}


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"event": "schedule_appointment"},
        {"data": {"name": "A", "email": "a@b.c"}},
        {"event": "", "data": {"name": "A", "email": "a@b.c"}},
        {"event": "schedule_appointment", "data": None},
        [],
        "schedule_appointment",
    ],
)
def test_missing_event_or_data(body):
    with pytest.raises(ValidationError) as exc:
        validate_payload(body)
    assert exc.value.message == "Missing event or data"


def test_unsupported_event_type():
    with pytest.raises(ValidationError) as exc:
        validate_payload({"event": "cancel_appointment", "data": {"name": "X", "email": "y@z.com"}})
    assert exc.value.message == "Unsupported event type"


def test_event_type_is_case_sensitive():
    with pytest.raises(ValidationError) as exc:
        validate_payload({"event": "Schedule_Appointment", "data": {"name": "X", "email": "y@z.com"}})
    assert exc.value.message == "Unsupported event type"


@pytest.mark.parametrize(
    "data",
    [
        {"email": "jane@example.com"},
        {"name": "Jane Doe"},
        {"name": "", "email": "jane@example.com"},
        {"name": "Jane Doe", "email": ""},
        {"name": None, "email": "jane@example.com"},
    ],
)
def test_missing_required_fields(data):
    with pytest.raises(ValidationError) as exc:
        validate_payload(_payload(**data))
    assert exc.value.message == "Missing required fields"


def test_non_object_data_is_missing_required_fields():
    with pytest.raises(ValidationError) as exc:
        validate_payload({"event": "schedule_appointment", "data": "Jane"})
    assert exc.value.message == "Missing required fields"


def test_values_are_not_format_checked():
    data = validate_payload(_payload(name="Jane", email="not-an-email", date="next tuesday"))
    assert data["email"] == "not-an-email"
    assert data["date"] == "next tuesday"


def test_normalize_fills_defaults():
    event = normalize_event({"name": "Jane Doe", "email": "jane@example.com"}, today="2024-03-01")
    assert event.to_row() == ["2024-03-01", "12:00", "Jane Doe", "jane@example.com", ""]


def test_normalize_treats_empty_values_as_missing():
    event = normalize_event(
        {"name": "Jane", "email": "j@x.io", "date": "", "time": None, "description": ""},
        today="2024-03-01",
    )
    assert event.date == "2024-03-01"
    assert event.time == "12:00"
    assert event.description == ""


def test_normalize_keeps_supplied_values():
    event = normalize_event(
        {"name": "Jane", "email": "j@x.io", "date": "2025-01-02", "time": "09:30", "description": "Checkup"}
    )
    assert event.to_row() == ["2025-01-02", "09:30", "Jane", "j@x.io", "Checkup"]


def test_default_date_is_current_utc_date():
    before = datetime.datetime.now(datetime.timezone.utc).strftime("%Y-%m-%d")
    event = parse_appointment(_payload(name="Jane", email="j@x.io"))
    after = datetime.datetime.now(datetime.timezone.utc).strftime("%Y-%m-%d")
    assert event.date in (before, after)
    assert len(utc_today()) == 10


def test_empty_data_object_counts_as_present():
    with pytest.raises(ValidationError) as exc:
        validate_payload({"event": "schedule_appointment", "data": {}})
    assert exc.value.message == "Missing required fields"


def test_zero_counts_as_missing():
    with pytest.raises(ValidationError) as exc:
        validate_payload(_payload(name=0, email="j@x.io"))
    assert exc.value.message == "Missing required fields"
