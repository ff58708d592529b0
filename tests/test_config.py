"""
Tests for config: engine constants and environment overrides
"""

import logging

import pytest

import pronostico.config as config
from pronostico.config import (
    BlendSettings,
    EngineConfig,
    MarketBlend,
    SuggestionRule,
    setup_logging,
)


class TestDefaults:

    def test_blend_constants(self):
        blend = BlendSettings()
        assert blend.min_records == 5
        assert (blend.outcome.cap, blend.outcome.divisor) == (0.40, 25)
        assert (blend.goals.cap, blend.goals.divisor) == (0.60, 15)
        assert (blend.btts.cap, blend.btts.divisor) == (0.50, 20)

    def test_market_blend(self):
        rule = MarketBlend(cap=0.5, divisor=20)
        assert rule.weight(0) == 0.0
        assert rule.weight(8) == pytest.approx(0.4)
        assert rule.weight(100) == 0.5

    def test_suggestion_rule(self):
        rule = SuggestionRule(threshold=50, base=40, cap=90)
        assert not rule.passes(50)
        assert rule.passes(50.1)
        assert rule.confidence(45) == 85
        assert rule.confidence(70) == 90

    def test_to_dict(self):
        data = EngineConfig().to_dict()
        assert data["defaults"]["home"] == 42.0
        assert data["thresholds"] == (0.5, 1.5, 2.5, 3.5)


class TestFromEnv:

    def test_no_overrides(self, monkeypatch):
        for name in ("BLEND_MIN_RECORDS", "HOME_ADVANTAGE", "H2H_MAX_MEETINGS"):
            monkeypatch.delenv(config.ENV_PREFIX + name, raising=False)
        cfg = EngineConfig.from_env()
        assert cfg.blend.min_records == 5
        assert cfg.strength.home_advantage == 1.15
        assert cfg.h2h_max_meetings is None

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("PRONOSTICO_BLEND_MIN_RECORDS", "3")
        monkeypatch.setenv("PRONOSTICO_BLEND_GOALS_CAP", "0.75")
        monkeypatch.setenv("PRONOSTICO_HOME_ADVANTAGE", "1.3")
        monkeypatch.setenv("PRONOSTICO_H2H_MAX_MEETINGS", "10")
        cfg = EngineConfig.from_env()
        assert cfg.blend.min_records == 3
        assert cfg.blend.goals.cap == 0.75
        assert cfg.strength.home_advantage == 1.3
        assert cfg.h2h_max_meetings == 10

    def test_bad_values_fall_back(self, monkeypatch):
        monkeypatch.setenv("PRONOSTICO_BLEND_MIN_RECORDS", "many")
        monkeypatch.setenv("PRONOSTICO_STRENGTH_WIN_RATE", "")
        cfg = EngineConfig.from_env()
        assert cfg.blend.min_records == 5
        assert cfg.strength.win_rate == 0.40

    def test_reload(self, monkeypatch):
        monkeypatch.setenv("PRONOSTICO_BLEND_BTTS_DIVISOR", "10")
        cfg = config.reload_config()
        assert cfg.blend.btts.divisor == 10
        assert config.get_config() is cfg
        monkeypatch.delenv("PRONOSTICO_BLEND_BTTS_DIVISOR")
        config.reload_config()


class TestLogging:

    def test_rotating_file(self, tmp_path):
        root = logging.getLogger()
        saved = list(root.handlers), root.level
        try:
            setup_logging("DEBUG", log_dir=tmp_path)
            logging.getLogger("pronostico.test").info("hello")
            assert (tmp_path / "pronostico.log").exists()
            assert root.level == logging.DEBUG
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers[:] = saved[0]
            root.setLevel(saved[1])
