import pytest

from ftfc.settings import DEFAULT_SYMBOLS, ScannerConfig, Settings
from ftfc.timeframes import STYLE_TIMEFRAMES, AggregateSource, DirectSource, resolve_style


def test_load_yaml_with_env_expansion(tmp_path, monkeypatch):
    monkeypatch.setenv("FTFC_BASE_URL", "https://proxy.test/chart")
    path = tmp_path / "config.yaml"
    path.write_text(
        "provider:\n"
        "  base_url: ${FTFC_BASE_URL}\n"
        "  timeout_s: 4\n"
        "scan:\n"
        "  batch_size: 3\n"
        "  batch_delay_ms: 250\n"
        "  default_style: position-trade\n"
        "watchlist:\n"
        "  tier1: [aapl, msft]\n"
        "  tier2: []\n",
        encoding="utf-8",
    )
    cfg = ScannerConfig.from_settings(Settings.load(str(path)))

    assert cfg.base_url == "https://proxy.test/chart"
    assert cfg.timeout_s == 4.0
    assert cfg.batch_size == 3
    assert cfg.batch_delay_s == pytest.approx(0.25)
    assert cfg.default_style == "position-trade"
    assert cfg.symbols == ["AAPL", "MSFT"]


def test_defaults_without_config_file():
    cfg = ScannerConfig.from_settings(Settings())
    assert cfg == ScannerConfig()
    assert cfg.batch_size == 5
    assert cfg.batch_delay_s == pytest.approx(0.6)
    assert cfg.timeout_s == 10.0
    assert cfg.symbols == DEFAULT_SYMBOLS


def test_repo_config_matches_defaults():
    import os
    root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    cfg = ScannerConfig.from_settings(Settings.load(os.path.join(root, "config", "config.yaml")))
    assert cfg == ScannerConfig()


@pytest.mark.parametrize("kw", [{"batch_size": 0}, {"batch_delay_s": -1}, {"timeout_s": 0}, {"default_style": "scalp"}])
def test_config_validation(kw):
    with pytest.raises(ValueError):
        ScannerConfig(**kw)


def test_every_style_has_three_timeframes():
    for style in STYLE_TIMEFRAMES:
        assert len(resolve_style(style)) == 3


def test_source_validation():
    with pytest.raises(ValueError):
        DirectSource("2h", "15d")
    with pytest.raises(ValueError):
        AggregateSource("1h", "15d", 0)
    agg = AggregateSource("1h", "15d", 4)
    assert agg.base == DirectSource("1h", "15d")
    assert agg.key != agg.base.key


def test_bare_tier_key_falls_back_to_default(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("watchlist:\n  tier1:\n  tier2: [coin]\n", encoding="utf-8")
    cfg = ScannerConfig.from_settings(Settings.load(str(path)))
    assert cfg.tier1 == ["AAPL", "AMZN", "GOOGL", "META", "MSFT", "NVDA", "TSLA", "SPY", "QQQ"]
    assert cfg.tier2 == ["COIN"]


def test_summary_line():
    line = Settings().summary()
    assert "timeout=10s" in line
    assert "Batch=5 every 0.6s | Style=swing-trade | Watchlist=17 symbols" in line
