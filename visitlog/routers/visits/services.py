"""Service helpers used by the visit router and the enrichment middleware."""

from typing import Optional
from urllib.parse import urlparse

from fastapi import Request
from pydantic import ValidationError

from visitlog.config import Settings, logger
from visitlog.core.address import resolve_request_address
from visitlog.core.enrichment import EnrichmentClient
from visitlog.core.notifier import TelegramNotifier
from visitlog.core.report_formatter import format_client_report, format_visit_report
from visitlog.core.user_agent import parse_user_agent

from .contexts import VisitContext
from .models import BrowserMetadata

# The landing page and the metadata endpoint produce their own reports
EXEMPT_PATHS = frozenset({"/", "/log-client-info", "/favicon.ico"})
EXEMPT_PREFIXES = ("/static/",)


def is_exempt_path(path: str) -> bool:
    return path in EXEMPT_PATHS or path.startswith(EXEMPT_PREFIXES)


async def run_visit_pipeline(
    request: Request,
    enrichment_client: EnrichmentClient,
    notifier: TelegramNotifier,
) -> VisitContext:
    """Resolve, enrich, format and deliver the report for one visit."""

    client_ip = resolve_request_address(request)
    request.state.client_ip = client_ip
    logger.info(f"Client IP: {client_ip}", extra={"path": request.url.path})

    user_agent = parse_user_agent(request.headers.get("User-Agent"))
    enrichment = await enrichment_client.enrich(client_ip)

    report = format_visit_report(
        client_ip,
        enrichment.geo_info,
        enrichment.risk_info,
        user_agent,
    )
    telegram_response = await notifier.send(report)

    return VisitContext(
        client_ip=client_ip,
        user_agent=user_agent,
        enrichment=enrichment,
        report=report,
        delivered=telegram_response is not None,
        telegram_response=telegram_response,
    )


def parse_client_metadata(body: bytes) -> Optional[BrowserMetadata]:
    """Decode a posted metadata body; None when nothing usable was sent."""
    if not body or not body.strip():
        return None

    try:
        metadata = BrowserMetadata.model_validate_json(body)
    except ValidationError as exc:
        logger.warning(
            "Client info body is not a JSON object",
            extra={"errors": exc.error_count()},
        )
        return None

    if metadata.is_empty():
        return None

    return metadata


async def report_client_metadata(
    metadata: BrowserMetadata, notifier: TelegramNotifier
) -> Optional[dict]:
    return await notifier.send(format_client_report(metadata))


def choose_redirect_target(requested: Optional[str], settings: Settings) -> str:
    """Pick the /source redirect target.

    Without an allowlist any target is honoured. With one, only http(s)
    targets on a listed host are; everything else gets the default URL.
    """
    if not requested:
        return settings.default_redirect_url

    if not settings.redirect_allowed_hosts:
        return requested

    parsed = urlparse(requested)
    host = (parsed.hostname or "").lower()
    if parsed.scheme in ("http", "https") and host in settings.redirect_allowed_hosts:
        return requested

    logger.warning(
        "Redirect target rejected by allowlist", extra={"redirect": requested}
    )
    return settings.default_redirect_url
