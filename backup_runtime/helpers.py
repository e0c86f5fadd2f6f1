# ------------------------------- Input coercion --------------------------
# Raw input is neutralised here instead of being rejected: anything that is
# not a finite, non-negative number becomes 0.
import math


def sanitize(value) -> float:
    """Finite, non-negative float from any raw input (else 0.0)."""
    if isinstance(value, bool):
        return float(value)
    try:
        x = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(x) or x < 0:
        return 0.0
    return x


def clamp(n, lo, hi):
    return max(lo, min(hi, n))


def clamp_count(value, hi) -> int:
    """Integer count in [1, hi]; 0, negatives and junk fall back to 1."""
    try:
        n = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 1
    return clamp(n or 1, 1, hi)


def round_half_up(x: float) -> int:
    """Round like a spreadsheet: .5 always goes up."""
    return int(math.floor(x + 0.5))


def safe_div(a, b):
    return a / b if b else 0.0
