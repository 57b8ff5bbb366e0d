"""
Configuration module for the visit logger
Contains logger setup and the environment-derived settings
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class ConfigError(ValueError):
    """Raised when the environment holds a value the service cannot start with."""


# -------------------------
# Logger Setup
# -------------------------
def setup_logger(
    name: str = __name__,
    log_file: Optional[str] = None,
    level: str = "INFO",
) -> logging.Logger:
    """
    Set up and return a logger with a console handler and an optional file handler

    Args:
        name: Logger name (usually the package name)
        log_file: Optional path to a log file
        level: Console handler level name

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    # Avoid adding duplicate handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


# Create the main application logger
logger = setup_logger(
    "visitlog",
    log_file=os.getenv("LOG_FILE") or None,
    level=os.getenv("LOG_LEVEL", "INFO"),
)


# -------------------------
# Settings
# -------------------------
DEFAULT_PORT = 3000
DEFAULT_TIMEOUT_SECONDS = 5.0
DEFAULT_REDIRECT_URL = "https://www.google.com"


@dataclass(frozen=True)
class Settings:
    """Secrets and tunables read once at startup and injected where needed."""

    ipinfo_token: Optional[str] = None
    ipqualityscore_key: Optional[str] = None
    telegram_bot_token: Optional[str] = None
    chat_id: Optional[str] = None
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    http_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    default_redirect_url: str = DEFAULT_REDIRECT_URL
    redirect_allowed_hosts: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment.

        Raises:
            ConfigError: If PORT or HTTP_TIMEOUT_SECONDS cannot be parsed
        """
        raw_port = os.getenv("PORT", str(DEFAULT_PORT))
        try:
            port = int(raw_port)
        except ValueError:
            raise ConfigError(f"PORT must be an integer, got {raw_port!r}")
        if not 0 < port < 65536:
            raise ConfigError(f"PORT out of range: {port}")

        raw_timeout = os.getenv("HTTP_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigError(
                f"HTTP_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}"
            )
        if timeout <= 0:
            raise ConfigError("HTTP_TIMEOUT_SECONDS must be positive")

        allowed_hosts = tuple(
            host.strip().lower()
            for host in os.getenv("REDIRECT_ALLOWED_HOSTS", "").split(",")
            if host.strip()
        )

        return cls(
            ipinfo_token=os.getenv("IPINFO_TOKEN"),
            ipqualityscore_key=os.getenv("IPQUALITYSCORE_KEY"),
            telegram_bot_token=os.getenv("TELEGRAM_BOT_TOKEN"),
            chat_id=os.getenv("CHAT_ID"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=port,
            http_timeout_seconds=timeout,
            default_redirect_url=os.getenv("DEFAULT_REDIRECT_URL")
            or DEFAULT_REDIRECT_URL,
            redirect_allowed_hosts=allowed_hosts,
        )

    def log_status(self) -> None:
        """Report which secrets are configured without revealing them."""
        logger.info("Configuration loaded successfully")
        logger.debug(f"IPINFO_TOKEN configured: {bool(self.ipinfo_token)}")
        logger.debug(f"IPQUALITYSCORE_KEY configured: {bool(self.ipqualityscore_key)}")
        logger.debug(f"TELEGRAM_BOT_TOKEN configured: {bool(self.telegram_bot_token)}")
        logger.debug(f"CHAT_ID configured: {bool(self.chat_id)}")
        logger.debug(f"Redirect allowlist: {list(self.redirect_allowed_hosts) or 'open'}")
