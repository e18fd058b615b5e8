"""Unit conversion helpers for WordprocessingML measurements."""
from __future__ import annotations

EMU_PER_POINT = 12700
TWIPS_PER_POINT = 20
EMU_PER_TWIP = EMU_PER_POINT // TWIPS_PER_POINT


def twips_to_emu(value: int) -> int:
    """Convert twips (1/20th of a point) to English Metric Units.

    One twip is exactly 635 EMU, so the conversion never loses precision.
    """
    return value * EMU_PER_TWIP


def twips_to_points(value: int) -> float:
    """Convert twips to points."""
    return value / TWIPS_PER_POINT


def emu_to_points(value: int) -> float:
    """Convert English Metric Units to typographic points."""
    return value / EMU_PER_POINT


def scale_to_width(source_width: int, source_height: int, target_width: int) -> int:
    """Return the height matching ``target_width`` at the source aspect ratio.

    The result is truncated towards zero, never rounded.
    """
    if source_width <= 0 or source_height <= 0:
        raise ValueError(f"Source dimensions must be positive, got {source_width}x{source_height}")
    return source_height * target_width // source_width
