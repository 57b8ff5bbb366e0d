"""Shared fixtures for application tests."""

from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from visitlog.config import Settings
from visitlog.core.enrichment import EnrichmentClient, EnrichmentResult, LookupResult
from visitlog.core.notifier import TelegramNotifier
from visitlog.main import create_app


class RecordingNotifier(TelegramNotifier):
    """Notifier that records messages instead of calling Telegram."""

    def __init__(self):
        super().__init__(bot_token="123:abc", chat_id="42")
        self.messages: List[str] = []

    async def send(self, message: str) -> Optional[Dict[str, Any]]:
        self.messages.append(message)
        return {"ok": True}


class StaticEnrichmentClient(EnrichmentClient):
    """Enrichment client returning canned lookups and recording addresses."""

    def __init__(self, geo: LookupResult, risk: LookupResult):
        super().__init__()
        self.geo = geo
        self.risk = risk
        self.addresses: List[str] = []

    async def enrich(self, ip: str) -> EnrichmentResult:
        self.addresses.append(ip)
        return EnrichmentResult(geo=self.geo, risk=self.risk)


@pytest.fixture
def settings() -> Settings:
    return Settings(telegram_bot_token="123:abc", chat_id="42")


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def enrichment_client() -> StaticEnrichmentClient:
    return StaticEnrichmentClient(
        geo=LookupResult.success({"city": "Lisbon", "country": "PT", "loc": "38.72,-9.13"}),
        risk=LookupResult.success({"vpn": True}),
    )


@pytest.fixture
def app(settings, enrichment_client, notifier):
    return create_app(settings, enrichment_client=enrichment_client, notifier=notifier)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)
