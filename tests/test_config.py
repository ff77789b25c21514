from __future__ import annotations

import pytest

from barchart.config import Settings, get_settings
from barchart.core.encoder import ChartEncoder


def test_default_canvas() -> None:
    settings = Settings()
    assert (settings.outer_width, settings.outer_height) == (600, 300)
    canvas = ChartEncoder(settings).canvas
    assert (canvas.width, canvas.height) == (540, 210)
    assert settings.band_padding == pytest.approx(0.33)
    assert settings.tick_count == 5
    assert settings.show_category_labels is False
    assert settings.reverse_categories is True


def test_settings_parsing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHART_OUTER_WIDTH", "800")
    monkeypatch.setenv("CHART_MARGIN_LEFT", "60")
    monkeypatch.setenv("CHART_BAND_PADDING", "0.1")
    monkeypatch.setenv("CHART_SHOW_CATEGORY_LABELS", "yes")
    settings = Settings()
    assert ChartEncoder(settings).canvas.width == 800 - 60 - 20
    assert settings.band_padding == pytest.approx(0.1)
    assert settings.show_category_labels is True


def test_malformed_numbers_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHART_TICK_COUNT", "five")
    monkeypatch.setenv("CHART_BAND_PADDING", "wide")
    settings = Settings()
    assert settings.tick_count == 5
    assert settings.band_padding == pytest.approx(0.33)


def test_unknown_log_level_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(RuntimeError):
        get_settings()
