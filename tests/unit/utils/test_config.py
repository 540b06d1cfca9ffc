"""
Unit tests for portfolio configuration loading.
"""
import pytest

from riskpremia.utils.config import (
    ENV_CAPITAL_EXPOSURE,
    ENV_RUN_PHASE,
    CalendarPolicy,
    PortfolioConfig,
    TrackingErrorPolicy,
    build_config,
    get_run_phase_name,
    load_config,
)

CONFIG_YAML = """
portfolio:
  symbols: [gld, tlt, vti]
  lookback_window: 60
  vol_target: 0.12
  max_leverage: 1.5
  capital_exposure: 27000
  rebalance_policy:
    mode: calendar
    trigger_day_of_month: 2
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv(ENV_CAPITAL_EXPOSURE, raising=False)
    monkeypatch.delenv(ENV_RUN_PHASE, raising=False)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / 'portfolio.yaml'
    path.write_text(CONFIG_YAML)
    return path


class TestPortfolioConfig:
    """Test suite for PortfolioConfig defaults and validation."""

    def test_defaults(self):
        config = PortfolioConfig()

        assert config.symbols == ['GLD', 'TLT', 'VTI']
        assert config.lookback_window == 90
        assert config.vol_target == 0.10
        assert config.max_leverage == 1.0
        assert config.min_commission == 1.0
        assert config.per_share_commission == 0.005
        assert config.annualization_factor == 252
        assert config.capital_exposure == 0.0
        assert config.rebalance_policy == TrackingErrorPolicy(threshold=0.10)
        assert config.is_calendar_mode is False

    def test_frozen(self):
        config = PortfolioConfig()
        with pytest.raises(Exception):
            config.vol_target = 0.2

    def test_with_capital_exposure(self):
        config = build_config({'rebalance_policy': {'mode': 'calendar'}})
        updated = config.with_capital_exposure(50000)

        assert updated.capital_exposure == 50000
        assert updated.is_calendar_mode
        assert config.capital_exposure == 0.0

    def test_with_negative_capital_rejected(self):
        with pytest.raises(ValueError):
            PortfolioConfig().with_capital_exposure(-1)

    @pytest.mark.parametrize("data,field", [
        ({'vol_target': 0}, 'vol_target'),
        ({'max_leverage': -1}, 'max_leverage'),
        ({'lookback_window': 0}, 'lookback_window'),
        ({'symbols': []}, 'symbols'),
        ({'symbols': ['GLD', 'gld']}, 'symbols'),
        ({'rebalance_policy': {'mode': 'tracking_error', 'threshold': 1.0}}, 'threshold'),
        ({'rebalance_policy': {'mode': 'calendar', 'trigger_day_of_month': 0}}, 'trigger_day_of_month'),
        ({'rebalance_policy': {'mode': 'weekly'}}, 'rebalance_policy'),
    ])
    def test_invalid_values(self, data, field):
        """Test every invalid field is reported with its name."""
        with pytest.raises(ValueError, match="Invalid portfolio configuration") as exc_info:
            build_config(data)
        assert field in str(exc_info.value)


class TestLoadConfig:
    """Test suite for load_config."""

    def test_load_yaml(self, config_file, tmp_path):
        config = load_config(config_file, env_file=str(tmp_path / '.env'))

        assert config.symbols == ['GLD', 'TLT', 'VTI']
        assert config.lookback_window == 60
        assert config.vol_target == 0.12
        assert config.max_leverage == 1.5
        assert config.capital_exposure == 27000
        assert config.rebalance_policy == CalendarPolicy(trigger_day_of_month=2)

    def test_top_level_mapping(self, tmp_path):
        """Test files without a portfolio: section are accepted."""
        path = tmp_path / 'flat.yaml'
        path.write_text("capital_exposure: 1000\n")

        assert load_config(path, env_file=str(tmp_path / '.env')).capital_exposure == 1000

    def test_env_overrides_capital(self, config_file, tmp_path, monkeypatch):
        monkeypatch.setenv(ENV_CAPITAL_EXPOSURE, '12345.5')

        config = load_config(config_file, env_file=str(tmp_path / '.env'))

        assert config.capital_exposure == 12345.5

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(tmp_path / 'missing.yaml', env_file=str(tmp_path / '.env'))

    def test_run_phase_name(self, monkeypatch):
        assert get_run_phase_name() == 'preview'

        monkeypatch.setenv(ENV_RUN_PHASE, 'live')
        assert get_run_phase_name() == 'live'
