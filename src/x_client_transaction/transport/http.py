"""
Bundled HTTP transport for fetching the homepage and the ondemand bundle.

Any object with ``get(url) -> (status, text)`` can stand in for it:

    class MyClient:
        def get(self, url):
            r = my_session.get(url)
            return r.status_code, r.text

    ClientTransaction.fetch(MyClient())
"""

import logging
from typing import Protocol

import requests

from ..config import TransactionConfig
from ..errors import TransportError

logger = logging.getLogger(__name__)


class HttpClient(Protocol):
    def get(self, url: str) -> tuple[int, str]: ...


class HttpTransport:
    """requests-backed transport with browser-like headers."""

    def __init__(self, config: TransactionConfig | None = None, session: requests.Session | None = None):
        self.config = config or TransactionConfig()
        self._session = session or requests.Session()
        self._session.headers.update(self.config.headers)

    def get(self, url: str) -> tuple[int, str]:
        try:
            resp = self._session.get(url, timeout=self.config.timeout)
        except requests.RequestException as e:
            logger.warning("GET %s failed: %s", url, e)
            raise TransportError(f"GET {url} failed: {e}", url=url) from e
        logger.debug("GET %s -> %d (%d bytes)", url, resp.status_code, len(resp.text))
        return resp.status_code, resp.text

    def close(self):
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
