"""Tests for the Telegram report templates."""

import pytest

from visitlog.core.enrichment import GeoInfo, RiskInfo
from visitlog.core.report_formatter import (
    build_map_link,
    format_client_report,
    format_visit_report,
    split_coordinates,
)
from visitlog.core.user_agent import UserAgentInfo
from visitlog.routers.visits.models import BrowserMetadata


class TestCoordinates:
    def test_loc_is_split_into_latitude_and_longitude(self) -> None:
        assert split_coordinates("12.34,56.78") == ("12.34", "56.78")

    def test_map_link_uses_both_coordinates(self) -> None:
        assert (
            build_map_link("12.34", "56.78")
            == "https://www.google.com/maps?q=12.34,56.78"
        )

    def test_map_link_percent_encodes_coordinates(self) -> None:
        assert (
            build_map_link("1 2", "3&4")
            == "https://www.google.com/maps?q=1%202,3%264"
        )

    @pytest.mark.parametrize("loc", [None, "", "12.34", ",", "  "])
    def test_missing_or_malformed_loc_gives_unknown(self, loc) -> None:
        assert split_coordinates(loc) == ("Unknown", "Unknown")


class TestVisitReport:
    def test_full_report_contains_every_field(self) -> None:
        geo = GeoInfo(
            city="Berlin",
            region="Berlin",
            country="DE",
            loc="12.34,56.78",
            org="AS3320 Deutsche Telekom AG",
            postal="10115",
            timezone="Europe/Berlin",
        )
        risk = RiskInfo(proxy=True, vpn=False, tor=True, hosting=True)
        agent = UserAgentInfo(
            raw="TestBrowser/1.0",
            os="Linux",
            browser="TestBrowser 1.0",
            device="Other",
            device_type="Desktop",
        )

        report = format_visit_report("203.0.113.10", geo, risk, agent)

        assert "<b>IP Address:</b> 203.0.113.10" in report
        assert "<b>Location:</b> Berlin, Berlin, DE" in report
        assert "(Latitude: 12.34, Longitude: 56.78)" in report
        assert '<a href="https://www.google.com/maps?q=12.34,56.78">' in report
        assert "<b>Organization:</b> AS3320 Deutsche Telekom AG" in report
        assert "<b>Timezone:</b> Europe/Berlin" in report
        assert "<b>Browser:</b> TestBrowser 1.0" in report
        assert "<b>Device:</b> Other (Desktop)" in report
        assert "<b>Is Proxy:</b> Yes" in report
        assert "<b>Is VPN:</b> No" in report
        assert "<b>Is TOR:</b> Yes" in report
        assert "<b>Is Residential:</b> No" in report
        assert "<b>Is Hosting Provider:</b> Yes" in report

    def test_empty_lookups_render_placeholders(self) -> None:
        report = format_visit_report("Unknown", GeoInfo(), RiskInfo(), UserAgentInfo())

        assert "<b>Location:</b> Unknown, Unknown, Unknown" in report
        assert "<b>Coordinates:</b> Unknown (Latitude: Unknown, Longitude: Unknown)" in report
        assert "https://www.google.com/maps?q=Unknown,Unknown" in report
        assert "<b>Postal Code:</b> Unknown" in report
        assert "<b>User-Agent:</b> Unknown" in report
        for label in ("Proxy", "VPN", "TOR", "Residential", "Public Proxy", "Hosting Provider"):
            assert f"<b>Is {label}:</b> No" in report

    def test_none_inputs_never_raise(self) -> None:
        report = format_visit_report("198.51.100.1", None, None, None)

        assert "198.51.100.1" in report
        assert "<b>Is VPN:</b> No" in report

    def test_values_are_escaped_for_telegram_html(self) -> None:
        agent = UserAgentInfo(raw="<script>alert(1)</script> & co")

        report = format_visit_report("1.2.3.4", GeoInfo(org="A&B <Hosting>"), None, agent)

        assert "&lt;script&gt;alert(1)&lt;/script&gt; &amp; co" in report
        assert "A&amp;B &lt;Hosting&gt;" in report
        assert "<script>" not in report


class TestClientReport:
    def test_report_uses_posted_camel_case_fields(self) -> None:
        metadata = BrowserMetadata.model_validate(
            {
                "screenWidth": 1920,
                "screenHeight": 1080,
                "colorDepth": 24,
                "pixelDepth": 24,
                "browserLanguage": "en-US",
                "platform": "Win32",
                "userAgent": "Mozilla/5.0",
                "cookieEnabled": True,
            }
        )

        report = format_client_report(metadata)

        assert "Client Screen &amp; Browser Info" in report
        assert "<b>Screen Resolution:</b> 1920x1080" in report
        assert "<b>Color Depth:</b> 24" in report
        assert "<b>Browser Language:</b> en-US" in report
        assert "<b>Platform:</b> Win32" in report
        assert "<b>Cookies Enabled:</b> Yes" in report

    def test_partial_metadata_renders_unknown(self) -> None:
        report = format_client_report(BrowserMetadata.model_validate({"platform": "MacIntel"}))

        assert "<b>Screen Resolution:</b> UnknownxUnknown" in report
        assert "<b>Platform:</b> MacIntel" in report
        assert "<b>Cookies Enabled:</b> Unknown" in report
