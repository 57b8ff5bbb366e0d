import sys
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from visitlog import __version__
from visitlog.config import ConfigError, Settings, logger
from visitlog.core.enrichment import EnrichmentClient
from visitlog.core.notifier import TelegramNotifier

from .routers import router
from .routers.visits.middleware import enrichment_middleware

STATIC_DIR = Path(__file__).resolve().parent / "static"


async def unhandled_error_handler(request: Request, exc: Exception) -> PlainTextResponse:
    logger.error(
        f"Unhandled error: {exc}",
        exc_info=exc,
        extra={"path": request.url.path},
    )
    return PlainTextResponse("Internal Server Error", status_code=500)


def create_app(
    settings: Optional[Settings] = None,
    enrichment_client: Optional[EnrichmentClient] = None,
    notifier: Optional[TelegramNotifier] = None,
) -> FastAPI:
    """Build the application with its collaborators wired from settings."""
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="Visit Logger",
        description="Enriches inbound visits and reports them to Telegram",
        version=__version__,
    )

    app.state.settings = settings
    app.state.enrichment_client = enrichment_client or EnrichmentClient(
        ipinfo_token=settings.ipinfo_token,
        ipqualityscore_key=settings.ipqualityscore_key,
        timeout=settings.http_timeout_seconds,
    )
    app.state.notifier = notifier or TelegramNotifier(
        bot_token=settings.telegram_bot_token,
        chat_id=settings.chat_id,
        timeout=settings.http_timeout_seconds,
    )

    app.include_router(router)
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    app.middleware("http")(enrichment_middleware)
    app.add_exception_handler(Exception, unhandled_error_handler)

    logger.info("Visit Logger API initialized successfully")
    return app


def run() -> None:
    """Start the server, exiting when the environment cannot be loaded."""
    try:
        settings = Settings.from_env()
    except ConfigError as exc:
        logger.critical(f"Invalid configuration: {exc}")
        sys.exit(1)

    settings.log_status()
    app = create_app(settings)
    logger.info(f"Server is running on http://{settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, proxy_headers=True)
