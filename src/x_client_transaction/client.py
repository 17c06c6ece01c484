"""
Client facade: builds key material once, then generates transaction IDs.

Usage:
    client = ClientTransaction.fetch()
    tid = client.generate_transaction_id("GET", "/i/api/1.1/jot/client_event.json")

Bring your own transport:
    html = my_client.get("https://x.com").text
    js = my_client.get(ClientTransaction.extract_ondemand_url(html)).text
    client = ClientTransaction(html, js)
"""

import logging
import time
from contextlib import contextmanager
from typing import Callable

from . import scanner
from .animation import derive_animation_key, frame_time_ms
from .config import HEADER_NAME, TransactionConfig
from .errors import TransactionError, TransportError
from .material import KeyMaterial
from .synthesizer import current_timestamp, random_byte, synthesize
from .transport.http import HttpClient, HttpTransport

logger = logging.getLogger(__name__)


@contextmanager
def _stage(name: str):
    """Tag any TransactionError raised inside with the construction stage."""
    try:
        yield
    except TransactionError as e:
        if e.stage is None:
            e.stage = name
        raise


class ClientTransaction:
    """Generates x-client-transaction-id values for one set of key material."""

    def __init__(
        self,
        home_page_html: str,
        ondemand_js: str,
        config: TransactionConfig | None = None,
        clock: Callable[[], float] | None = None,
        rng: Callable[[], int] | None = None,
    ):
        self.config = config or TransactionConfig()
        self._clock = clock or time.time
        self._rng = rng or random_byte

        self.material = self._build_material(home_page_html, ondemand_js)
        # pure function of the material; no clock input
        self.animation_key = derive_animation_key(self.material)
        logger.info("Transaction client ready (%s)", self.material.ondemand_url)

    @classmethod
    def new(cls, home_page_html: str, ondemand_js: str, **kwargs) -> "ClientTransaction":
        return cls(home_page_html, ondemand_js, **kwargs)

    @classmethod
    def fetch(
        cls,
        http_client: HttpClient | None = None,
        config: TransactionConfig | None = None,
        **kwargs,
    ) -> "ClientTransaction":
        """Fetch the homepage and ondemand bundle, then build a client."""
        config = config or TransactionConfig()
        transport = http_client or HttpTransport(config)
        try:
            with _stage("homepage"):
                html = cls._get(transport, config.home_url)
            with _stage("extract"):
                ondemand_url = cls.extract_ondemand_url(html)
            with _stage("ondemand"):
                js = cls._get(transport, ondemand_url)
        finally:
            if http_client is None:
                transport.close()
        return cls(html, js, config=config, **kwargs)

    @staticmethod
    def extract_ondemand_url(home_page_html: str) -> str:
        return scanner.find_ondemand_script_url(home_page_html)

    def generate_transaction_id(
        self,
        method: str,
        path: str,
        *,
        timestamp: int | None = None,
        random_byte: int | None = None,
    ) -> str:
        """
        Build the transaction ID for one request.

        ``timestamp`` (seconds since the platform epoch) and ``random_byte``
        pin the two non-deterministic inputs; both default to live sources.
        """
        if timestamp is None:
            timestamp = current_timestamp(self._clock())
        rng = self._rng if random_byte is None else (lambda: random_byte)
        return synthesize(method, path, self.material.raw_key, self.animation_key, timestamp, rng)

    def header(self, method: str, path: str) -> dict:
        return {HEADER_NAME: self.generate_transaction_id(method, path)}

    def describe(self) -> dict:
        """Summary of the extracted material. Never includes the key itself."""
        m = self.material
        return {
            "ondemand_url": m.ondemand_url,
            "key_length": len(m.raw_key),
            "row_index": m.indices.row_index,
            "key_byte_indices": list(m.indices.key_byte_indices),
            "frame_count": len(m.frames),
            "frame_index": m.frame_index,
            "frame_row": m.row_index,
            "frame_time_ms": frame_time_ms(m),
            "animation_key_length": len(self.animation_key),
        }

    # ── Construction helpers ──

    def _build_material(self, html: str, js: str) -> KeyMaterial:
        with _stage("extract"):
            soup = scanner.parse_html(html)
            ondemand_url = scanner.find_ondemand_script_url(html)
            indices = scanner.find_index_table(js)
            raw_key = scanner.find_verification_key(soup, key_length=self.config.key_length)
            frames = scanner.find_frame_table(soup)
        with _stage("validate"):
            return KeyMaterial.build(raw_key, frames, indices, ondemand_url)

    @staticmethod
    def _get(transport: HttpClient, url: str) -> str:
        try:
            status, body = transport.get(url)
        except TransactionError:
            raise
        except Exception as e:
            raise TransportError(f"GET {url} failed: {e}", url=url) from e
        if status != 200:
            raise TransportError(f"{url} returned HTTP {status}", status=status, url=url)
        return body

    def __repr__(self) -> str:
        return f"ClientTransaction(ondemand_url={self.material.ondemand_url!r})"
