from typing import List, Optional


class ConfigError(Exception):
    """Raised at startup when required settings are missing or malformed."""


class ValidationError(Exception):
    """Client-side payload problem, reported as HTTP 400."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SheetsAPIError(Exception):
    """Non-2xx response from the Google Sheets API."""

    def __init__(self, message: str, status_code: Optional[int] = None, errors: Optional[List[dict]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or []


class BackendError(Exception):
    """Any failure talking to the spreadsheet backend, reported as HTTP 500."""

    PREFIX = "Failed to update spreadsheet: "

    def __init__(self, original: Exception):
        self.original = original
        self.original_message = _message_of(original)
        self.message = f"{self.PREFIX}{self.original_message}"
        super().__init__(self.message)


def _message_of(exc: Exception) -> str:
    message = getattr(exc, "message", None)
    if message:
        return message
    # google-auth errors carry (message, response_body) in args
    if len(exc.args) > 1 and isinstance(exc.args[0], str):
        return exc.args[0]
    return str(exc) or exc.__class__.__name__
