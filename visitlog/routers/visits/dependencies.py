"""FastAPI dependencies shared across visit endpoints."""

from fastapi import Request

from visitlog.config import Settings
from visitlog.core.enrichment import EnrichmentClient
from visitlog.core.notifier import TelegramNotifier


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_enrichment_client(request: Request) -> EnrichmentClient:
    return request.app.state.enrichment_client


def get_notifier(request: Request) -> TelegramNotifier:
    return request.app.state.notifier
