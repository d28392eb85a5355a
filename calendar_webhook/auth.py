"""
calendar_webhook/auth.py
------------------------
Service-account access tokens for the Sheets API.
Tokens are cached in memory and refreshed shortly before they expire.
"""

import asyncio
import datetime
import json
import os
import time

from google.auth.transport.requests import Request
from google.oauth2 import service_account

from .config import SHEETS_SCOPES, Settings
from .errors import ConfigError
from .logger import get_logger

logger = get_logger("auth")

# Refresh this many seconds before the token's stated expiry
EXPIRY_MARGIN = 60
# Used when the credentials do not report an expiry
DEFAULT_LIFETIME = 3600


def load_credentials(settings: Settings) -> service_account.Credentials:
    """Inline GOOGLE_SERVICE_ACCOUNT_JSON wins over the key file."""
    if settings.service_account_json:
        try:
            info = json.loads(settings.service_account_json)
        except ValueError as e:
            raise ConfigError(f"GOOGLE_SERVICE_ACCOUNT_JSON is not valid JSON: {e}")
        return service_account.Credentials.from_service_account_info(info, scopes=SHEETS_SCOPES)

    path = settings.service_account_file
    if not os.path.exists(path):
        raise ConfigError(f"Service account file not found: {path}")
    return service_account.Credentials.from_service_account_file(path, scopes=SHEETS_SCOPES)


class TokenProvider:
    def __init__(self, credentials):
        self._credentials = credentials
        self._token = None
        self._expires_at = 0.0
        # created on first use so it belongs to the running loop
        self._lock = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenProvider":
        return cls(load_credentials(settings))

    def _fresh_token(self):
        if self._token and time.time() < self._expires_at:
            return self._token
        return None

    async def get_token(self) -> str:
        """Return a cached bearer token, refreshing it off the event loop when stale."""
        token = self._fresh_token()
        if token:
            return token

        if self._lock is None:
            self._lock = asyncio.Lock()

        async with self._lock:
            # another request may have refreshed while we waited
            token = self._fresh_token()
            if token:
                return token

            # google-auth refreshes synchronously over requests
            await asyncio.to_thread(self._credentials.refresh, Request())

            self._token = self._credentials.token
            expiry = self._credentials.expiry
            if expiry is not None:
                expires = expiry.replace(tzinfo=datetime.timezone.utc).timestamp()
            else:
                expires = time.time() + DEFAULT_LIFETIME
            self._expires_at = expires - EXPIRY_MARGIN
            logger.info("Obtained new Sheets access token.")
            return self._token
