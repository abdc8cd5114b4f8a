from __future__ import annotations

import logging

import uvicorn
from dotenv import load_dotenv

from impostor.main import app_from_env


def main() -> None:
    # .env must be loaded before the settings are read.
    load_dotenv(override=False)

    app = app_from_env()
    settings = app.state.settings
    logging.getLogger(__name__).info("Server starting on http://localhost:%s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
