"""Pydantic models used by the visit router."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BrowserMetadata(BaseModel):
    """Browser metadata posted by the landing page. Untrusted, loosely typed."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    screen_width: Any = Field(None, alias="screenWidth")
    screen_height: Any = Field(None, alias="screenHeight")
    color_depth: Any = Field(None, alias="colorDepth")
    pixel_depth: Any = Field(None, alias="pixelDepth")
    browser_language: Any = Field(None, alias="browserLanguage")
    platform: Any = None
    user_agent: Any = Field(None, alias="userAgent")
    cookie_enabled: Any = Field(None, alias="cookieEnabled")

    def is_empty(self) -> bool:
        return not self.model_fields_set and not self.model_extra
