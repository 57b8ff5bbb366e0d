"""HTTP middleware that reports every non-exempt visit before it is handled."""

from fastapi import Request

from visitlog.config import logger

from .services import is_exempt_path, run_visit_pipeline


async def enrichment_middleware(request: Request, call_next):
    if not is_exempt_path(request.url.path):
        try:
            await run_visit_pipeline(
                request,
                request.app.state.enrichment_client,
                request.app.state.notifier,
            )
        except Exception as exc:
            # Reporting must never change what the visitor gets back
            logger.exception(
                "Visit pipeline failed", extra={"path": request.url.path, "error": str(exc)}
            )

    return await call_next(request)
