"""Global configuration for polyrecon."""

import os

# ---------- Digit decoding ----------
MIN_BASE = 2
MAX_BASE = 36

# ---------- Reconstruction ----------
# The secret is P(0).
DEFAULT_TARGET = 0


def parse_check_points(text: str) -> tuple:
    """Parse a comma-separated list of integers; empty means ``(0, 100)``."""
    try:
        points = tuple(int(t) for t in text.split(",") if t.strip())
    except ValueError as exc:
        raise ValueError(
            f"POLYRECON_CHECK_POINTS must be comma-separated integers, got {text!r}"
        ) from exc
    return points or (0, 100)


# Abscissae where the Lagrange and coefficient paths are cross-checked.
# Override with e.g. POLYRECON_CHECK_POINTS="0,100,-7"
DEFAULT_CHECK_POINTS = parse_check_points(os.environ.get("POLYRECON_CHECK_POINTS", ""))

# ---------- Share documents ----------
DEFAULT_INPUT_PATH = os.environ.get("POLYRECON_INPUT", "input.json")

# ---------- Service limits ----------
# Gaussian elimination is O(k^3) on growing integers; cap request size.
MAX_POINTS = int(os.environ.get("POLYRECON_MAX_POINTS", "256"))

# ---------- Logging ----------
LOG_LEVEL = os.environ.get("POLYRECON_LOG_LEVEL", "INFO")
