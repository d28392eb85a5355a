"""Shared fixtures for the calendar webhook tests."""

import os
import tempfile

# Keep test log files out of the working tree; must run before the package is imported.
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="calendar_webhook_logs_"))
os.environ.setdefault("ENV", "prod")

import pytest
from fastapi.testclient import TestClient

from calendar_webhook.config import Settings
from calendar_webhook.main import create_app
from calendar_webhook.sheets import CalendarSheet
from tests.fakes.fake_sheets_client import FakeSheetsClient


@pytest.fixture
def settings() -> Settings:
    return Settings(spreadsheet_id="sheet-123", sheet_name="Calendar")


@pytest.fixture
def fake_sheets() -> FakeSheetsClient:
    # A fresh spreadsheet has a default first tab with id 0
    return FakeSheetsClient(tabs={"Sheet1": []})


@pytest.fixture
def calendar(fake_sheets, settings) -> CalendarSheet:
    return CalendarSheet(fake_sheets, settings.sheet_name)


@pytest.fixture
def client(settings, calendar) -> TestClient:
    return TestClient(create_app(settings, calendar=calendar))
