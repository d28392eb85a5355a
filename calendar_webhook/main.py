import json
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from . import __version__
from .config import Settings
from .errors import ValidationError
from .logger import get_logger
from .models import ErrorResponse, WebhookResponse
from .sheets import CalendarSheet
from .validation import parse_appointment

logger = get_logger("webhook")

HEALTH_TEXT = "Calendar Webhook Service Running"


def _error(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details).model_dump(exclude_none=True)
    return JSONResponse(body, status_code=status_code)


def _is_json(request: Request) -> bool:
    content_type = request.headers.get("content-type", "")
    return content_type.split(";")[0].strip().lower() == "application/json"


def create_app(settings: Settings, calendar: Optional[CalendarSheet] = None) -> FastAPI:
    """Build the ASGI app. `calendar` is built from settings unless one is passed in."""
    if calendar is None:
        calendar = CalendarSheet.from_settings(settings)

    app = FastAPI(title="Calendar Webhook", version=__version__)
    app.state.settings = settings
    app.state.calendar = calendar

    # ------------------------------------------------------------
    # WEBHOOK
    # ------------------------------------------------------------
    @app.post("/webhook")
    async def webhook(request: Request):
        raw = await request.body()
        # Only JSON bodies are parsed; anything else is treated as an empty object
        if not _is_json(request) or not raw.strip():
            raw = b"{}"
        try:
            body = json.loads(raw)
        except ValueError:
            logger.warning("Rejected webhook with invalid JSON body")
            return _error(400, "Invalid JSON body")

        logger.info(f"Incoming webhook: {json.dumps(body, indent=2, ensure_ascii=False)}")

        try:
            event = parse_appointment(body)
        except ValidationError as e:
            logger.warning(f"Rejected webhook: {e.message}")
            return _error(400, e.message)

        try:
            await calendar.add_to_calendar(event)
        except Exception as e:
            logger.exception(f"Webhook Error: {e}")
            return _error(500, "Internal server error", details=str(e))

        return JSONResponse(WebhookResponse().model_dump())

    # ------------------------------------------------------------
    # HEALTH CHECK
    # ------------------------------------------------------------
    @app.get("/", response_class=PlainTextResponse)
    async def health():
        return HEALTH_TEXT

    return app
