"""
Achievement-band calculator.

A single threshold partitions the 0..100 score scale into achieved, nearly
achieved and not achieved bands. Every renderer uses this one function.
"""
from dataclasses import dataclass
from typing import List, Optional

from rpp_copilot.config import settings as config

ACHIEVED = "Tercapai"
NEARLY_ACHIEVED = "Hampir Tercapai"
NOT_ACHIEVED = "Belum Tercapai"

MAX_SCORE = 100


@dataclass(frozen=True)
class Band:
    label: str
    low: int
    high: int

    def to_text(self) -> str:
        return f"{self.label}: {self.low} - {self.high}"


def compute_bands(threshold: int, nearly_width: Optional[int] = None) -> List[Band]:
    """
    Derive the achievement bands for a threshold.

    achieved = [t, 100]; nearly = [max(0, t - width), t - 1], omitted when it
    would invert; not achieved = [0, below nearly], omitted when its upper
    bound would be negative.

    Args:
        threshold: Minimum achievement score (clamped to 0..100)
        nearly_width: Width of the nearly-achieved band, defaults to
            config.NEARLY_ACHIEVED_BAND_WIDTH

    Returns:
        Bands ordered from highest to lowest
    """
    width = config.NEARLY_ACHIEVED_BAND_WIDTH if nearly_width is None else max(0, nearly_width)
    t = max(0, min(MAX_SCORE, int(threshold)))

    bands = [Band(ACHIEVED, t, MAX_SCORE)]

    nearly_low = max(0, t - width)
    nearly_high = t - 1
    if nearly_high >= nearly_low:
        bands.append(Band(NEARLY_ACHIEVED, nearly_low, nearly_high))
        not_high = nearly_low - 1
    else:
        not_high = t - 1

    if not_high >= 0:
        bands.append(Band(NOT_ACHIEVED, 0, not_high))

    return bands


def format_bands(bands: List[Band]) -> str:
    """One line per band, the text shown in every exported document."""
    return "\n".join(band.to_text() for band in bands)
