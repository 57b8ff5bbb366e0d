"""Visit logger: enriches inbound requests and reports them to Telegram."""

__version__ = "1.0.0"
