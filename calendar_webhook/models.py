import datetime
from typing import Any, List, Optional

from pydantic import BaseModel

CALENDAR_COLUMNS = [
    "Date",
    "Time",
    "Name",
    "Email",
    "Description",
]

DEFAULT_TIME = "12:00"
DEFAULT_DESCRIPTION = ""

# Sheet grid used when the tab has to be created
NEW_SHEET_ROWS = 1000
NEW_SHEET_COLUMNS = 10


class AppointmentEvent(BaseModel):
    # Values are stored as received; the sheet parses them (USER_ENTERED).
    name: Any
    email: Any
    date: Any
    time: Any = DEFAULT_TIME
    description: Any = DEFAULT_DESCRIPTION

    def to_row(self) -> List[Any]:
        """Row values in CALENDAR_COLUMNS order."""
        return [self.date, self.time, self.name, self.email, self.description]


def is_blank(value: Any) -> bool:
    """Null, false, zero and the empty string count as not supplied. Empty objects and lists do not."""
    if value is None or value is False or value == "":
        return True
    return isinstance(value, (int, float)) and value == 0


def utc_today() -> str:
    return datetime.datetime.now(datetime.timezone.utc).strftime("%Y-%m-%d")


def _or_default(value: Any, default: Any) -> Any:
    return default if is_blank(value) else value


def normalize_event(data: dict, today: Optional[str] = None) -> AppointmentEvent:
    """
    Fill in defaults for the optional fields.
    Blank values count as missing, so "" for date still becomes today.
    """
    return AppointmentEvent(
        name=data.get("name"),
        email=data.get("email"),
        date=_or_default(data.get("date"), today or utc_today()),
        time=_or_default(data.get("time"), DEFAULT_TIME),
        description=_or_default(data.get("description"), DEFAULT_DESCRIPTION),
    )


class WebhookResponse(BaseModel):
    success: bool = True
    message: str = "Event added to calendar"


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
