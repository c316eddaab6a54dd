def lerp(start: float, end: float, t: float) -> float:
    """Linear interpolation between start and end as t goes from 0 to 1."""
    return start * (1 - t) + end * t


def clamp(value: float, low: float, high: float) -> float:
    """value pushed into [low, high]"""
    return max(low, min(high, value))
