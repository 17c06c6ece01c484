"""
Animation key derivation.

The homepage ships four "loading" SVG animations. One row of one frame is
picked by the verification key, played to a key-dependent point in time,
and the resulting colour + rotation styles are serialized to a hex string.
That string is the animation key fed into the transaction digest.

Every rounding step below is part of the server's contract.
"""

import math
from functools import reduce

from . import config
from .cubic import Cubic
from .material import KeyMaterial
from .numeric import (
    float_to_hex,
    interpolate,
    js_round,
    odd_coefficient,
    rotation_matrix,
    round2,
    round_half_away,
    solve,
)


def target_time(material: KeyMaterial) -> float:
    """Point in the animation (0..1) to sample, derived from key-byte nibbles."""
    key = material.raw_key
    frame_time = reduce(
        lambda left, right: left * right,
        [float(key[i] % config.ROW_MODULUS) for i in material.indices.key_byte_indices],
        1.0,
    )
    frame_time = js_round(frame_time / 10) * 10
    return frame_time / config.TOTAL_ANIMATION_TIME


def _matrix_hex(value: float) -> str:
    hex_value = float_to_hex(abs(round2(value)))
    if hex_value.startswith("."):
        return f"0{hex_value}".lower()
    return hex_value.lower() or "0"


def animate(row: tuple[int, ...], time: float) -> str:
    if len(row) < config.MIN_ROW_VALUES:
        raise ValueError(f"row has {len(row)} values, need at least {config.MIN_ROW_VALUES}")

    from_color = [float(v) for v in row[:3]] + [1.0]
    to_color = [float(v) for v in row[3:6]] + [1.0]
    from_rotation = [0.0]
    to_rotation = [solve(float(row[6]), 60.0, 360.0, rounding=True)]

    curves = [solve(float(v), odd_coefficient(i), 1.0, rounding=False) for i, v in enumerate(row[7:])]
    factor = Cubic(curves).value(time)

    color = [max(0.0, min(255.0, v)) for v in interpolate(from_color, to_color, factor)]
    rotation = interpolate(from_rotation, to_rotation, factor)
    matrix = rotation_matrix(rotation[0])

    parts = [format(int(round_half_away(v)), "x") for v in color[:-1]]
    parts.extend(_matrix_hex(v) for v in matrix)
    parts.extend(["0", "0"])
    return "".join(parts).replace(".", "").replace("-", "")


def derive_animation_key(material: KeyMaterial) -> str:
    return animate(material.selected_row, target_time(material))


def frame_time_ms(material: KeyMaterial) -> int:
    """Sample point in animation milliseconds, for diagnostics."""
    return int(math.floor(target_time(material) * config.TOTAL_ANIMATION_TIME))
