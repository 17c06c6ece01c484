"""CSS-style cubic-bezier easing curve."""

import sys


class Cubic:
    """Easing curve with control points (x1, y1, x2, y2)."""

    def __init__(self, curves: list[float]):
        if len(curves) < 4:
            raise ValueError(f"cubic curve needs 4 control values, got {len(curves)}")
        self.curves = curves

    def value(self, time: float) -> float:
        """Y for a given X (time). Linear extrapolation outside [0, 1]."""
        x1, y1, x2, y2 = self.curves[:4]

        if time <= 0.0:
            gradient = 0.0
            if x1 > 0.0:
                gradient = y1 / x1
            elif y1 == 0.0 and x2 > 0.0:
                gradient = y2 / x2
            return gradient * time

        if time >= 1.0:
            gradient = 0.0
            if x2 < 1.0:
                gradient = (y2 - 1.0) / (x2 - 1.0)
            elif x2 == 1.0 and x1 < 1.0:
                gradient = (y1 - 1.0) / (x1 - 1.0)
            return 1.0 + gradient * (time - 1.0)

        # bisect on x, then read y at the same parameter
        low, high = 0.0, 1.0
        mid = 0.0
        while True:
            mid = (low + high) / 2
            x_estimate = self.bezier(x1, x2, mid)
            if abs(time - x_estimate) < 0.00001:
                return self.bezier(y1, y2, mid)
            if abs(high - low) < sys.float_info.epsilon:
                break
            if x_estimate < time:
                low = mid
            else:
                high = mid

        return self.bezier(y1, y2, mid)

    @staticmethod
    def bezier(p1: float, p2: float, t: float) -> float:
        """3*p1*(1-t)^2*t + 3*p2*(1-t)*t^2 + t^3"""
        u = 1.0 - t
        return 3.0 * p1 * u * u * t + 3.0 * p2 * u * t * t + t * t * t
