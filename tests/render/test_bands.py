"""
Tests for render/bands.py - Achievement-band calculator
"""
import pytest

from rpp_copilot.render.bands import (
    ACHIEVED,
    NEARLY_ACHIEVED,
    NOT_ACHIEVED,
    Band,
    compute_bands,
    format_bands,
)


class TestComputeBands:
    """Test compute_bands"""

    def test_default_threshold(self):
        assert compute_bands(75, nearly_width=10) == [
            Band(ACHIEVED, 75, 100),
            Band(NEARLY_ACHIEVED, 65, 74),
            Band(NOT_ACHIEVED, 0, 64),
        ]

    def test_low_threshold_omits_not_achieved(self):
        assert compute_bands(5, nearly_width=10) == [
            Band(ACHIEVED, 5, 100),
            Band(NEARLY_ACHIEVED, 0, 4),
        ]

    def test_zero_threshold(self):
        assert compute_bands(0, nearly_width=10) == [Band(ACHIEVED, 0, 100)]

    def test_full_threshold(self):
        assert compute_bands(100, nearly_width=10) == [
            Band(ACHIEVED, 100, 100),
            Band(NEARLY_ACHIEVED, 90, 99),
            Band(NOT_ACHIEVED, 0, 89),
        ]

    def test_zero_width_has_no_nearly_band(self):
        assert compute_bands(70, nearly_width=0) == [
            Band(ACHIEVED, 70, 100),
            Band(NOT_ACHIEVED, 0, 69),
        ]

    @pytest.mark.parametrize("threshold,expected_low", [(-10, 0), (150, 100)])
    def test_threshold_is_clamped(self, threshold, expected_low):
        assert compute_bands(threshold, nearly_width=10)[0] == Band(ACHIEVED, expected_low, 100)

    @pytest.mark.parametrize("threshold", [0, 1, 9, 10, 11, 50, 75, 99, 100])
    def test_bands_cover_scale_without_overlap(self, threshold):
        bands = compute_bands(threshold, nearly_width=10)
        covered = sorted(score for band in bands for score in range(band.low, band.high + 1))
        assert covered == list(range(0, 101))

    def test_uses_configured_width(self, monkeypatch):
        from rpp_copilot.config import settings as config
        monkeypatch.setattr(config, "NEARLY_ACHIEVED_BAND_WIDTH", 5)
        assert compute_bands(75)[1] == Band(NEARLY_ACHIEVED, 70, 74)


class TestFormatBands:
    """Test format_bands"""

    def test_format(self):
        assert format_bands(compute_bands(75, nearly_width=10)) == (
            "Tercapai: 75 - 100\n"
            "Hampir Tercapai: 65 - 74\n"
            "Belum Tercapai: 0 - 64"
        )
