import argparse

import uvicorn
from dotenv import load_dotenv

from .config import load_settings
from .logger import get_logger, reconfigure_loggers
from .main import create_app

logger = get_logger("server")


def parse_args(argv=None):
    p = argparse.ArgumentParser(prog="calendar_webhook")
    p.add_argument("--env-file", default=None, help="Path to a .env file (default: search from cwd)")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    # Loggers were built at import; rebuild them once LOG_DIR/ENV from .env are in place
    load_dotenv(args.env_file)
    reconfigure_loggers()

    settings = load_settings(args.env_file)
    app = create_app(settings)

    logger.info(f"Server running on port {settings.port}")
    logger.info(f"Configured for spreadsheet: {settings.spreadsheet_id}")
    logger.info(f"Using sheet: {settings.sheet_name}")

    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
