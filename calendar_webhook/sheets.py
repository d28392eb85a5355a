"""
calendar_webhook/sheets.py
--------------------------
Google Sheets v4 REST calls (httpx) and the calendar tab logic built on them:
resolve the tab by title, create it with a header row when missing, append rows.
"""

import re
from typing import List, Optional
from urllib.parse import quote

import httpx

from .auth import TokenProvider
from .config import Settings
from .errors import BackendError, SheetsAPIError
from .logger import get_logger
from .models import CALENDAR_COLUMNS, NEW_SHEET_COLUMNS, NEW_SHEET_ROWS, AppointmentEvent

logger = get_logger("sheets")

SHEETS_API = "https://sheets.googleapis.com/v4/spreadsheets"

_PLAIN_SHEET_NAME = re.compile(r"^[A-Za-z0-9_]+$")


def a1_range(sheet_name: str, cells: str) -> str:
    """`Calendar!A:E`, or `'My Calendar'!A:E` when the title needs quoting."""
    if _PLAIN_SHEET_NAME.match(sheet_name):
        return f"{sheet_name}!{cells}"
    escaped = sheet_name.replace("'", "''")
    return f"'{escaped}'!{cells}"


def _api_error(response: httpx.Response) -> SheetsAPIError:
    try:
        body = response.json().get("error", {})
    except (ValueError, AttributeError):
        body = {}
    if not isinstance(body, dict):
        body = {"message": str(body)}

    message = body.get("message") or f"Sheets API returned HTTP {response.status_code}"
    errors = body.get("errors") if isinstance(body.get("errors"), list) else []
    return SheetsAPIError(message, status_code=response.status_code, errors=errors)


class SheetsClient:
    """Thin async wrapper over the four Sheets endpoints the bridge needs."""

    def __init__(
        self,
        spreadsheet_id: str,
        token_provider: TokenProvider,
        timeout: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.spreadsheet_id = spreadsheet_id
        self._tokens = token_provider
        self._timeout = timeout
        self._transport = transport

    async def _request(self, method: str, path: str = "", params: Optional[dict] = None, json: Optional[dict] = None) -> dict:
        token = await self._tokens.get_token()
        url = f"{SHEETS_API}/{self.spreadsheet_id}{path}"
        headers = {"Authorization": f"Bearer {token}"}

        async with httpx.AsyncClient(transport=self._transport, timeout=self._timeout) as client:
            r = await client.request(method, url, params=params, json=json, headers=headers)

        if r.is_error:
            raise _api_error(r)
        return r.json()

    async def get_metadata(self, fields: str) -> dict:
        return await self._request("GET", params={"fields": fields})

    async def batch_update(self, requests: List[dict]) -> dict:
        return await self._request("POST", ":batchUpdate", json={"requests": requests})

    async def update_values(self, range_: str, values: List[list], value_input_option: str = "USER_ENTERED") -> dict:
        return await self._request(
            "PUT",
            f"/values/{quote(range_, safe='')}",
            params={"valueInputOption": value_input_option},
            json={"range": range_, "majorDimension": "ROWS", "values": values},
        )

    async def append_values(
        self,
        range_: str,
        values: List[list],
        value_input_option: str = "USER_ENTERED",
        insert_data_option: str = "INSERT_ROWS",
    ) -> dict:
        return await self._request(
            "POST",
            f"/values/{quote(range_, safe='')}:append",
            params={"valueInputOption": value_input_option, "insertDataOption": insert_data_option},
            json={"range": range_, "majorDimension": "ROWS", "values": values},
        )


class CalendarSheet:
    """
    The calendar tab inside a fixed spreadsheet.

    Nothing is cached between calls: every add_to_calendar() re-reads the
    spreadsheet metadata. Two concurrent requests that both find the tab
    missing will both try to add it; the backend rejects the second with a
    duplicate-title error and that request fails with a 500.
    """

    def __init__(self, client: SheetsClient, sheet_name: str):
        self.client = client
        self.sheet_name = sheet_name

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> "CalendarSheet":
        client = SheetsClient(
            settings.spreadsheet_id,
            TokenProvider.from_settings(settings),
            timeout=settings.sheets_timeout,
            transport=transport,
        )
        return cls(client, settings.sheet_name)

    async def get_sheet_id(self) -> Optional[int]:
        """Id of the tab whose title matches exactly, or None."""
        meta = await self.client.get_metadata("sheets(properties(sheetId,title))")
        for sheet in meta.get("sheets", []):
            props = sheet.get("properties", {})
            if props.get("title") == self.sheet_name:
                # the API omits sheetId when it is 0
                return props.get("sheetId", 0)
        return None

    async def create_sheet(self) -> int:
        """Add the tab and write the header row. The tab is not removed if the header write fails."""
        logger.info(f"Creating new sheet: {self.sheet_name}")
        res = await self.client.batch_update([
            {
                "addSheet": {
                    "properties": {
                        "title": self.sheet_name,
                        "gridProperties": {
                            "rowCount": NEW_SHEET_ROWS,
                            "columnCount": NEW_SHEET_COLUMNS,
                        },
                    }
                }
            }
        ])
        sheet_id = res["replies"][0]["addSheet"]["properties"]["sheetId"]

        await self.client.update_values(a1_range(self.sheet_name, "A1:E1"), [list(CALENDAR_COLUMNS)])
        return sheet_id

    async def ensure_sheet(self) -> int:
        sheet_id = await self.get_sheet_id()
        if sheet_id is None:
            sheet_id = await self.create_sheet()
        return sheet_id

    async def append_event(self, event: AppointmentEvent) -> dict:
        response = await self.client.append_values(a1_range(self.sheet_name, "A:E"), [event.to_row()])
        logger.info(f"Event added: {response.get('updates')}")
        return response

    async def add_to_calendar(self, event: AppointmentEvent) -> dict:
        """Ensure the tab exists, then append one row. Backend failures raise BackendError."""
        try:
            await self.ensure_sheet()
            return await self.append_event(event)
        except Exception as e:
            wrapped = BackendError(e)
            logger.error(f"Sheets API Error: {wrapped.original_message}")
            for sub in getattr(e, "errors", None) or []:
                logger.error(f"- {sub.get('message') if isinstance(sub, dict) else sub}")
            raise wrapped from e
