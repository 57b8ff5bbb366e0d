"""Geolocation (ipinfo.io) and risk (IPQualityScore) lookups for a client address."""

from __future__ import annotations

import asyncio
import ipaddress
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel, ConfigDict

from visitlog.config import DEFAULT_TIMEOUT_SECONDS, logger

IPINFO_BASE_URL = "https://ipinfo.io"
IPQUALITYSCORE_BASE_URL = "https://ipqualityscore.com"


def normalize_address(ip: Optional[str]) -> Optional[str]:
    """Return the canonical form of an IP address, or None if it is not one."""
    try:
        return str(ipaddress.ip_address((ip or "").strip()))
    except ValueError:
        return None


class GeoInfo(BaseModel):
    """Subset of the ipinfo.io payload used in reports."""

    model_config = ConfigDict(extra="ignore")

    city: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None
    loc: Optional[str] = None
    org: Optional[str] = None
    postal: Optional[str] = None
    timezone: Optional[str] = None


class RiskInfo(BaseModel):
    """Proxy/VPN signals from the IPQualityScore payload."""

    model_config = ConfigDict(extra="ignore")

    proxy: bool = False
    vpn: bool = False
    tor: bool = False
    residential: bool = False
    public_proxy: bool = False
    hosting: bool = False


@dataclass
class LookupResult:
    """Outcome of a single lookup; failures carry an empty payload."""

    ok: bool
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    @classmethod
    def success(cls, data: Dict[str, Any]) -> "LookupResult":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: str) -> "LookupResult":
        return cls(ok=False, data={}, error=error)


@dataclass
class EnrichmentResult:
    geo: LookupResult
    risk: LookupResult

    @property
    def geo_info(self) -> GeoInfo:
        return _to_model(GeoInfo, self.geo)

    @property
    def risk_info(self) -> RiskInfo:
        return _to_model(RiskInfo, self.risk)


def _to_model(model_cls, result: LookupResult):
    # Values of the wrong type (e.g. a numeric postal code) are coerced or dropped
    cleaned: Dict[str, Any] = {}
    for name, info in model_cls.model_fields.items():
        value = result.data.get(name)
        if value is None:
            continue
        if info.annotation is bool:
            cleaned[name] = bool(value)
        else:
            cleaned[name] = str(value)
    return model_cls(**cleaned)


class EnrichmentClient:
    """Runs both lookups for an address, each behind its own failure boundary."""

    def __init__(
        self,
        ipinfo_token: Optional[str] = None,
        ipqualityscore_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        ipinfo_base_url: str = IPINFO_BASE_URL,
        ipqualityscore_base_url: str = IPQUALITYSCORE_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.ipinfo_token = ipinfo_token
        self.ipqualityscore_key = ipqualityscore_key
        self.timeout = timeout
        self.ipinfo_base_url = ipinfo_base_url.rstrip("/")
        self.ipqualityscore_base_url = ipqualityscore_base_url.rstrip("/")
        self.transport = transport

    async def enrich(self, ip: str) -> EnrichmentResult:
        """Run the geolocation and risk lookups concurrently."""
        geo, risk = await asyncio.gather(self.lookup_geo(ip), self.lookup_risk(ip))
        logger.debug(
            "Enrichment finished",
            extra={"client_ip": ip, "geo_ok": geo.ok, "risk_ok": risk.ok},
        )
        return EnrichmentResult(geo=geo, risk=risk)

    async def lookup_geo(self, ip: str) -> LookupResult:
        address = normalize_address(ip)
        if address is None:
            return _invalid_address("IP info", ip)
        url = f"{self.ipinfo_base_url}/{address}/json"
        return await self._fetch_json(
            "IP info", url, params={"token": self.ipinfo_token or ""}
        )

    async def lookup_risk(self, ip: str) -> LookupResult:
        address = normalize_address(ip)
        if address is None:
            return _invalid_address("privacy info", ip)
        url = (
            f"{self.ipqualityscore_base_url}/api/json/ip/"
            f"{self.ipqualityscore_key or ''}/{address}"
        )
        result = await self._fetch_json("privacy info", url)
        # IPQualityScore reports bad keys and quota errors with HTTP 200
        if result.ok and result.data.get("success") is False:
            message = str(result.data.get("message") or "request rejected")
            logger.error(f"Error fetching privacy info: {message}")
            return LookupResult.failure(message)
        return result

    async def _fetch_json(
        self, label: str, url: str, params: Optional[Dict[str, str]] = None
    ) -> LookupResult:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            error = f"HTTP {e.response.status_code}"
            logger.error(f"Error fetching {label}: {error}")
            return LookupResult.failure(error)
        except httpx.RequestError as e:
            error = f"Network error: {e!r}"
            logger.error(f"Error fetching {label}: {error}")
            return LookupResult.failure(error)
        except httpx.InvalidURL as e:
            error = f"Invalid request URL: {e}"
            logger.error(f"Error fetching {label}: {error}")
            return LookupResult.failure(error)
        except ValueError as e:
            error = f"Malformed response body: {e}"
            logger.error(f"Error fetching {label}: {error}")
            return LookupResult.failure(error)

        if not isinstance(payload, dict):
            error = f"Unexpected response type: {type(payload).__name__}"
            logger.error(f"Error fetching {label}: {error}")
            return LookupResult.failure(error)

        return LookupResult.success(payload)


def _invalid_address(label: str, ip: Optional[str]) -> LookupResult:
    logger.warning(f"Skipping {label} lookup for invalid address {ip!r}")
    return LookupResult.failure("Invalid client address")
