"""Rounding and formatting helpers that reproduce the browser's number handling."""

import math


def round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def round2(value: float) -> float:
    return round_half_away(value * 100) / 100


def js_round(value: float) -> float:
    """JavaScript Math.round: halves go toward +inf, so -0.5 -> 0, -1.5 -> -1."""
    if value - math.trunc(value) == -0.5:
        return float(math.ceil(value))
    return round_half_away(value)


def odd_coefficient(index: int) -> float:
    return -1.0 if index % 2 == 1 else 0.0


def solve(value: float, minimum: float, maximum: float, rounding: bool) -> float:
    """Scale a 0-255 byte into [minimum, maximum]."""
    result = value * ((maximum - minimum) / 255.0) + minimum
    if rounding:
        return float(math.floor(result))
    return round2(result)


def interpolate(start: list[float], end: list[float], factor: float) -> list[float]:
    if len(start) != len(end):
        raise ValueError(f"interpolation length mismatch: {len(start)} != {len(end)}")
    return [a * (1 - factor) + b * factor for a, b in zip(start, end)]


def rotation_matrix(degrees: float) -> list[float]:
    """2x2 rotation matrix as [cos, -sin, sin, cos]."""
    radians = math.radians(degrees)
    return [math.cos(radians), -math.sin(radians), math.sin(radians), math.cos(radians)]


def _hex_digit(digit: int) -> str:
    return chr(digit + 55) if digit > 9 else str(digit)


def float_to_hex(value: float) -> str:
    """Hex form of a non-negative float, e.g. 10.0 -> "A", 0.5 -> "0.8"."""
    if value == 0:
        return "0"

    quotient = math.floor(value)
    fraction = value - quotient

    digits = ""
    if quotient == 0:
        digits = "0"
    while quotient > 0:
        quotient, remainder = divmod(quotient, 16)
        digits = _hex_digit(remainder) + digits

    if fraction > 0:
        digits += "."
        while fraction > 0:
            fraction *= 16
            integer_part = math.floor(fraction)
            fraction -= integer_part
            digits += _hex_digit(integer_part)
            if len(digits) > 20:
                break

    return digits
