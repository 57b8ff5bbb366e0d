"""Tests for user-agent parsing."""

from visitlog.core.user_agent import UNKNOWN, UserAgentInfo, parse_user_agent

CHROME_WINDOWS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
SAFARI_IPHONE = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_1 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.1 Mobile/15E148 Safari/604.1"
)


def test_desktop_browser_is_parsed() -> None:
    info = parse_user_agent(CHROME_WINDOWS)

    assert info.raw == CHROME_WINDOWS
    assert info.os.startswith("Windows")
    assert info.browser.startswith("Chrome 120")
    assert info.device_type == "Desktop"


def test_mobile_browser_is_parsed() -> None:
    info = parse_user_agent(SAFARI_IPHONE)

    assert info.os.startswith("iOS")
    assert "Safari" in info.browser
    assert info.device == "iPhone"
    assert info.device_type == "Mobile"


def test_missing_user_agent_degrades_to_unknown() -> None:
    assert parse_user_agent(None) == UserAgentInfo()
    assert parse_user_agent("   ") == UserAgentInfo()
    assert UserAgentInfo().browser == UNKNOWN


def test_garbage_user_agent_never_raises() -> None:
    info = parse_user_agent("definitely not a browser")

    assert info.raw == "definitely not a browser"
    assert info.os
    assert info.browser
