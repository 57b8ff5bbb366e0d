"""Best-effort user-agent parsing."""

from dataclasses import dataclass
from typing import Optional

from user_agents import parse

from visitlog.config import logger

UNKNOWN = "Unknown"


@dataclass(frozen=True)
class UserAgentInfo:
    raw: str = UNKNOWN
    os: str = UNKNOWN
    browser: str = UNKNOWN
    device: str = UNKNOWN
    device_type: str = UNKNOWN


def _join(family: Optional[str], version: Optional[str]) -> str:
    family = (family or "").strip()
    if not family:
        return UNKNOWN
    version = (version or "").strip()
    return f"{family} {version}" if version else family


def _device_type(agent) -> str:
    if agent.is_bot:
        return "Bot"
    if agent.is_tablet:
        return "Tablet"
    if agent.is_mobile:
        return "Mobile"
    if agent.is_pc:
        return "Desktop"
    return UNKNOWN


def parse_user_agent(user_agent: Optional[str]) -> UserAgentInfo:
    """Split a User-Agent header into OS, browser and device descriptions.

    Missing or unparseable headers degrade to ``"Unknown"`` fields.
    """
    if not user_agent or not user_agent.strip():
        return UserAgentInfo()

    try:
        agent = parse(user_agent)
        return UserAgentInfo(
            raw=user_agent,
            os=_join(agent.os.family, agent.os.version_string),
            browser=_join(agent.browser.family, agent.browser.version_string),
            device=_join(agent.device.family, None),
            device_type=_device_type(agent),
        )
    except Exception as exc:
        logger.warning("User-agent parsing failed", extra={"error": str(exc)})
        return UserAgentInfo(raw=user_agent)
