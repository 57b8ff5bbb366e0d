"""
HTML report templates for Telegram messages.

Two reports are produced: the visit report built from the resolved address,
the enrichment lookups and the parsed user agent, and the client report built
from the browser metadata posted by the landing page. Every value is escaped
for Telegram's HTML parse mode and every missing value renders as a
placeholder, so formatting never raises.
"""

import html
from typing import TYPE_CHECKING, Any, Optional, Tuple
from urllib.parse import quote

from visitlog.core.enrichment import GeoInfo, RiskInfo
from visitlog.core.user_agent import UNKNOWN, UserAgentInfo

if TYPE_CHECKING:
    from visitlog.routers.visits.models import BrowserMetadata

MAP_LINK_TEMPLATE = "https://www.google.com/maps?q={latitude},{longitude}"


def _text(value: Any) -> str:
    """Render a value for the report, escaping it for Telegram HTML."""
    if value is None:
        return UNKNOWN
    if isinstance(value, bool):
        return "Yes" if value else "No"
    text = str(value).strip()
    if not text:
        return UNKNOWN
    return html.escape(text, quote=False)


def _flag(value: Any) -> str:
    return "Yes" if value else "No"


def split_coordinates(loc: Optional[str]) -> Tuple[str, str]:
    """Split an ipinfo ``loc`` value ("lat,long") into its two parts."""
    if not loc or "," not in loc:
        return UNKNOWN, UNKNOWN
    latitude, longitude = loc.split(",", 1)
    return latitude.strip() or UNKNOWN, longitude.strip() or UNKNOWN


def build_map_link(latitude: str, longitude: str) -> str:
    return MAP_LINK_TEMPLATE.format(
        latitude=quote(latitude, safe=""), longitude=quote(longitude, safe="")
    )


def format_visit_report(
    client_ip: str,
    geo: Optional[GeoInfo],
    risk: Optional[RiskInfo],
    user_agent: Optional[UserAgentInfo],
) -> str:
    """Build the visit report from the address, lookups and user agent."""
    geo = geo or GeoInfo()
    risk = risk or RiskInfo()
    user_agent = user_agent or UserAgentInfo()

    latitude, longitude = split_coordinates(geo.loc)
    map_link = html.escape(build_map_link(latitude, longitude), quote=True)

    return f"""
<b>Client Info:</b>
- 🏷 <b>IP Address:</b> {_text(client_ip)}
- 📍 <b>Location:</b> {_text(geo.city)}, {_text(geo.region)}, {_text(geo.country)}
- 📍 <b>Coordinates:</b> {_text(geo.loc)} (Latitude: {_text(latitude)}, Longitude: {_text(longitude)})
- 🌐 <b>Google Maps:</b> <a href="{map_link}">View Location</a>
- 🏢 <b>Organization:</b> {_text(geo.org)}
- 🏤 <b>Postal Code:</b> {_text(geo.postal)}
- 🕒 <b>Timezone:</b> {_text(geo.timezone)}
- 🖥 <b>User-Agent:</b> {_text(user_agent.raw)}
- 📱 <b>Operating System:</b> {_text(user_agent.os)}
- 🌐 <b>Browser:</b> {_text(user_agent.browser)}
- 📱 <b>Device:</b> {_text(user_agent.device)} ({_text(user_agent.device_type)})

<b>Privacy Info:</b>
- 🔒 <b>Is Proxy:</b> {_flag(risk.proxy)}
- 🔒 <b>Is VPN:</b> {_flag(risk.vpn)}
- 🔒 <b>Is TOR:</b> {_flag(risk.tor)}
- 🔒 <b>Is Residential:</b> {_flag(risk.residential)}
- 🔒 <b>Is Public Proxy:</b> {_flag(risk.public_proxy)}
- 🔒 <b>Is Hosting Provider:</b> {_flag(risk.hosting)}
"""


def format_client_report(metadata: "BrowserMetadata") -> str:
    """Build the screen and browser report from posted metadata."""
    return f"""
<b>Client Screen &amp; Browser Info:</b>
- 🖥 <b>Screen Resolution:</b> {_text(metadata.screen_width)}x{_text(metadata.screen_height)}
- 🎨 <b>Color Depth:</b> {_text(metadata.color_depth)}
- 📏 <b>Pixel Depth:</b> {_text(metadata.pixel_depth)}
- 🌐 <b>Browser Language:</b> {_text(metadata.browser_language)}
- 📱 <b>Platform:</b> {_text(metadata.platform)}
- 🖥 <b>User-Agent:</b> {_text(metadata.user_agent)}
- 🍪 <b>Cookies Enabled:</b> {_text(metadata.cookie_enabled)}
"""
