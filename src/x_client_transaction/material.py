"""
Key material extracted from the homepage and the ondemand bundle.

KeyMaterial is built once per client and never mutated. build() cross-checks
every index before anything is derived from it, so a bad page fails here
instead of producing a token the server silently rejects.
"""

import logging
from dataclasses import dataclass

from . import config
from .errors import InconsistentKeyMaterial

logger = logging.getLogger(__name__)

Row = tuple[int, ...]
Frame = tuple[Row, ...]


@dataclass(frozen=True)
class FrameTable:
    """Coordinate rows of each loading-x-anim frame, ordered by frame number."""

    frames: tuple[Frame, ...]

    def __len__(self) -> int:
        return len(self.frames)

    def __getitem__(self, index: int) -> Frame:
        return self.frames[index]


@dataclass(frozen=True)
class IndexTable:
    """Key-byte positions read out of the ondemand bundle."""

    row_index: int
    key_byte_indices: tuple[int, ...]


@dataclass(frozen=True)
class KeyMaterial:
    raw_key: bytes
    frames: FrameTable
    indices: IndexTable
    ondemand_url: str

    @classmethod
    def build(cls, raw_key: bytes, frames: FrameTable, indices: IndexTable, ondemand_url: str) -> "KeyMaterial":
        key_len = len(raw_key)

        positions = [indices.row_index, *indices.key_byte_indices, config.FRAME_SELECTOR_INDEX]
        for pos in positions:
            if pos >= key_len:
                raise InconsistentKeyMaterial(
                    f"key byte index {pos} out of range for {key_len}-byte key"
                )

        frame_index = raw_key[config.FRAME_SELECTOR_INDEX] % config.FRAME_COUNT
        if frame_index >= len(frames):
            raise InconsistentKeyMaterial(
                f"frame selector {frame_index} out of range ({len(frames)} frames)"
            )

        rows = frames[frame_index]
        row_index = raw_key[indices.row_index] % config.ROW_MODULUS
        if row_index >= len(rows):
            raise InconsistentKeyMaterial(
                f"row selector {row_index} out of range ({len(rows)} rows in frame {frame_index})"
            )

        row = rows[row_index]
        if len(row) < config.MIN_ROW_VALUES:
            raise InconsistentKeyMaterial(
                f"row {row_index} has {len(row)} values, need at least {config.MIN_ROW_VALUES}"
            )

        logger.debug("Key material ok: frame=%d row=%d", frame_index, row_index)
        return cls(raw_key=bytes(raw_key), frames=frames, indices=indices, ondemand_url=ondemand_url)

    @property
    def frame_index(self) -> int:
        return self.raw_key[config.FRAME_SELECTOR_INDEX] % config.FRAME_COUNT

    @property
    def row_index(self) -> int:
        return self.raw_key[self.indices.row_index] % config.ROW_MODULUS

    @property
    def selected_row(self) -> Row:
        return self.frames[self.frame_index][self.row_index]
