from __future__ import annotations


def _fmt(x: float, precision: int) -> str:
    # Normalise -0.0 so it never produces "-0" in output.
    if not x:
        x = 0.0
    # Strip trailing zeros.
    s = f"{x:.{precision}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    if s == "-0":
        s = "0"
    return s or "0"
