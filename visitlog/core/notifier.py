from typing import Any, Dict, Optional

import httpx

from visitlog.config import DEFAULT_TIMEOUT_SECONDS, logger

TELEGRAM_API_BASE_URL = "https://api.telegram.org"


def _error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class TelegramNotifier:
    """Delivers HTML reports to a Telegram chat through the Bot API."""

    def __init__(
        self,
        bot_token: Optional[str],
        chat_id: Optional[str],
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        api_base_url: str = TELEGRAM_API_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.timeout = timeout
        self.api_base_url = api_base_url.rstrip("/")
        self.transport = transport

    async def send(self, message: str) -> Optional[Dict[str, Any]]:
        """
        Send a message to the configured chat.

        Args:
            message: Report text using Telegram HTML markup

        Returns:
            The Bot API response payload, or None when delivery failed.
            Delivery failures are logged and never raised.
        """
        if not self.bot_token or not self.chat_id:
            logger.warning(
                "Telegram delivery skipped: TELEGRAM_BOT_TOKEN or CHAT_ID is not set"
            )
            return None

        logger.debug(f"Sending message to Telegram: {message}")
        url = f"{self.api_base_url}/bot{self.bot_token}/sendMessage"
        payload = {"chat_id": self.chat_id, "text": message, "parse_mode": "HTML"}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(url, json=payload)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Error sending message to Telegram: HTTP {e.response.status_code} "
                f"- {_error_body(e.response)}"
            )
        except httpx.RequestError as e:
            # The URL contains the bot token, so only the exception type is logged
            logger.error(f"Error sending message to Telegram: {type(e).__name__}")
        except ValueError as e:
            logger.error(f"Telegram returned a malformed response: {e}")
        return None
