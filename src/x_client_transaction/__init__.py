"""Generate x-client-transaction-id headers for the X (Twitter) web API."""

from .client import ClientTransaction
from .config import HEADER_NAME, TransactionConfig
from .errors import (
    DecodeError,
    ExtractionError,
    InconsistentKeyMaterial,
    ParseError,
    PatternNotFound,
    RandomSourceError,
    TransactionError,
    TransportError,
)
from .material import FrameTable, IndexTable, KeyMaterial

__version__ = "0.1.0"

__all__ = [
    "ClientTransaction",
    "TransactionConfig",
    "HEADER_NAME",
    "KeyMaterial",
    "FrameTable",
    "IndexTable",
    "TransactionError",
    "ExtractionError",
    "PatternNotFound",
    "ParseError",
    "DecodeError",
    "InconsistentKeyMaterial",
    "TransportError",
    "RandomSourceError",
]
