"""
Transaction ID synthesis.

Layout of the decoded token (before base64):

    [r] [key bytes ^ r] [timestamp LE u32 ^ r] [sha256[:16] ^ r] [3 ^ r]

where r is a single random byte and the digest covers
"METHOD!path!timestamp" + salt + animation key.
"""

import base64
import hashlib
import math
import os
import time as _time
from typing import Callable

from . import config
from .errors import RandomSourceError


def current_timestamp(now: float | None = None) -> int:
    """Seconds since the platform epoch, as an unsigned 32-bit value."""
    if now is None:
        now = _time.time()
    return max(0, math.floor(now) - config.EPOCH) & 0xFFFFFFFF


def random_byte() -> int:
    try:
        return os.urandom(1)[0]
    except OSError as e:
        raise RandomSourceError(f"could not read random byte: {e}") from e


def hash_input(method: str, path: str, timestamp: int, animation_key: str) -> bytes:
    return f"{method.upper()}!{path}!{timestamp}{config.HASH_SALT}{animation_key}".encode("utf-8")


def build_payload(key: bytes, timestamp: int, digest: bytes) -> bytes:
    return (
        bytes(key)
        + timestamp.to_bytes(4, "little")
        + digest[: config.DIGEST_BYTES]
        + bytes([config.PROTOCOL_VERSION])
    )


def obfuscate(payload: bytes, xor_byte: int) -> bytes:
    return bytes([xor_byte]) + bytes(b ^ xor_byte for b in payload)


def encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii").rstrip("=")


def synthesize(
    method: str,
    path: str,
    key: bytes,
    animation_key: str,
    timestamp: int,
    rng: Callable[[], int] = random_byte,
) -> str:
    if not method:
        raise ValueError("method must not be empty")
    if not path:
        raise ValueError("path must not be empty")
    if not 0 <= timestamp <= 0xFFFFFFFF:
        raise ValueError(f"timestamp {timestamp} does not fit in an unsigned 32-bit value")

    digest = hashlib.sha256(hash_input(method, path, timestamp, animation_key)).digest()
    payload = build_payload(key, timestamp, digest)

    try:
        xor_byte = rng()
    except RandomSourceError:
        raise
    except Exception as e:
        raise RandomSourceError(f"random source failed: {e}") from e
    if not isinstance(xor_byte, int) or not 0 <= xor_byte <= 255:
        raise RandomSourceError(f"random source returned {xor_byte!r}, expected 0..255")

    return encode(obfuscate(payload, xor_byte))
