from __future__ import annotations

from datetime import datetime

from .options import UnitMode


def epoch_text(ts: float) -> str:
    # repr keeps the sub-second part exactly as stored.
    return repr(float(ts))


def human_text(ts: float, output_format: str) -> str:
    """Render `ts` in the local timezone using a strftime template."""
    return datetime.fromtimestamp(ts).strftime(output_format)


def format_timestamp(ts: float, unit_mode: UnitMode, output_format: str) -> str:
    """
    Render one timestamp for the given unit mode.

    Raises OverflowError/OSError/ValueError when the platform cannot represent
    `ts` as a local date; callers treat that as an unavailable field.
    """
    if unit_mode is UnitMode.EPOCH:
        return epoch_text(ts)
    if unit_mode is UnitMode.HUMAN:
        return human_text(ts, output_format)
    if unit_mode is UnitMode.BOTH:
        return f"{epoch_text(ts)} {human_text(ts, output_format)}"
    raise ValueError(f"unsupported unit mode: {unit_mode!r}")
