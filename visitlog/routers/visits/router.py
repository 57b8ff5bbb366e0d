"""FastAPI router for the landing page, redirect and client-info endpoints."""

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse, PlainTextResponse, RedirectResponse

from visitlog.config import Settings, logger
from visitlog.core.notifier import TelegramNotifier

from .dependencies import get_notifier, get_settings
from .services import (
    choose_redirect_target,
    parse_client_metadata,
    report_client_metadata,
)

STATIC_DIR = Path(__file__).resolve().parents[2] / "static"

router = APIRouter(tags=["Visits"])


@router.get("/", include_in_schema=False)
async def landing_page() -> FileResponse:
    """Serve the landing page that posts browser metadata back."""
    return FileResponse(STATIC_DIR / "index.html")


@router.get("/source")
async def source_redirect(
    redirect: Optional[str] = None,
    settings: Settings = Depends(get_settings),
) -> RedirectResponse:
    """Redirect the visitor once the enrichment middleware has reported them."""
    target = choose_redirect_target(redirect, settings)
    logger.info(f"Redirecting to: {target}")
    return RedirectResponse(target, status_code=302)


@router.post("/log-client-info", response_class=PlainTextResponse)
async def log_client_info(
    request: Request,
    notifier: TelegramNotifier = Depends(get_notifier),
) -> PlainTextResponse:
    """Forward screen and browser metadata collected by the landing page."""
    metadata = parse_client_metadata(await request.body())
    if metadata is None:
        logger.warning("Client info request without a usable body")
        return PlainTextResponse("No client information received", status_code=400)

    await report_client_metadata(metadata, notifier)
    return PlainTextResponse("OK", status_code=200)
