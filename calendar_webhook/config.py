import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from .errors import ConfigError

SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


class Settings(BaseModel):
    """Read once at startup and handed to create_app(); never mutated."""

    model_config = ConfigDict(frozen=True)

    spreadsheet_id: str
    sheet_name: str = "Calendar"
    host: str = "0.0.0.0"
    port: int = 3000
    service_account_json: Optional[str] = None
    service_account_file: str = "credentials.json"
    sheets_timeout: float = 20.0


def _number(name: str, default: str, cast):
    raw = os.getenv(name, default).strip()
    try:
        return cast(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Build Settings from the environment (and .env, if present)."""
    load_dotenv(env_file)

    spreadsheet_id = os.getenv("SPREADSHEET_ID", "").strip()
    if not spreadsheet_id:
        raise ConfigError("SPREADSHEET_ID is not set in the environment variables.")

    return Settings(
        spreadsheet_id=spreadsheet_id,
        sheet_name=os.getenv("SHEET_NAME") or "Calendar",
        host=os.getenv("HOST") or "0.0.0.0",
        port=_number("PORT", "3000", int),
        service_account_json=os.getenv("GOOGLE_SERVICE_ACCOUNT_JSON") or None,
        service_account_file=os.getenv("GOOGLE_SERVICE_ACCOUNT_FILE") or "credentials.json",
        sheets_timeout=_number("SHEETS_TIMEOUT", "20", float),
    )
