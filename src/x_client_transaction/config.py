"""Endpoints, browser headers and the constants the token algorithm depends on."""

import os
from dataclasses import dataclass, field


BASE_URL = "https://x.com"
ONDEMAND_BASE_URL = "https://abs.twimg.com/responsive-web/client-web"
ONDEMAND_URL_TEMPLATE = ONDEMAND_BASE_URL + "/ondemand.s.{hash}a.js"

HEADER_NAME = "x-client-transaction-id"

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/133.0.0.0 Safari/537.36"
)

HEADERS = {
    "accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "accept-language": "en-US,en;q=0.9",
    "user-agent": USER_AGENT,
}

# Salt baked into the platform's client-side bundle
HASH_SALT = "obfiowerehiring"
# 2023-05-01 00:00:00 UTC
EPOCH = 1682924400
DIGEST_BYTES = 16
PROTOCOL_VERSION = 3

KEY_LENGTH = 48
TOTAL_ANIMATION_TIME = 4096.0
FRAME_COUNT = 4
ROW_MODULUS = 16
FRAME_SELECTOR_INDEX = 5
MIN_ROW_VALUES = 11


@dataclass(frozen=True)
class TransactionConfig:
    home_url: str = BASE_URL
    headers: dict = field(default_factory=lambda: dict(HEADERS))
    timeout: float = 30
    key_length: int | None = KEY_LENGTH

    @classmethod
    def from_env(cls) -> "TransactionConfig":
        """Build a config, letting X_TXID_* environment variables override defaults."""
        headers = dict(HEADERS)
        user_agent = os.environ.get("X_TXID_USER_AGENT")
        if user_agent:
            headers["user-agent"] = user_agent
        return cls(
            home_url=os.environ.get("X_TXID_HOME_URL", BASE_URL),
            headers=headers,
            timeout=float(os.environ.get("X_TXID_TIMEOUT", "30")),
        )
