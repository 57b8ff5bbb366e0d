"""Lightweight dataclasses shared across visit helpers."""

from dataclasses import dataclass
from typing import Optional

from visitlog.core.enrichment import EnrichmentResult
from visitlog.core.user_agent import UserAgentInfo


@dataclass
class VisitContext:
    client_ip: str
    user_agent: UserAgentInfo
    enrichment: EnrichmentResult
    report: str
    delivered: bool
    telegram_response: Optional[dict] = None
