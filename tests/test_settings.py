"""
Tests for run settings, game config validation and the command line.
"""

import pytest

from monopoly_sim import cli
from monopoly_sim.config import GameConfig
from monopoly_sim.exceptions import ConfigurationError
from monopoly_sim.settings import SimulationSettings, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults():
    settings = SimulationSettings()
    assert settings.games == 1000
    assert settings.max_rounds == 100
    assert settings.workers == 1
    assert settings.seed is None
    assert settings.strategies == ["default"]
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MONOSIM_GAMES", "25")
    monkeypatch.setenv("MONOSIM_SEED", "99")
    monkeypatch.setenv("MONOSIM_STRATEGIES", "greedy, cautious")
    monkeypatch.setenv("MONOSIM_LOG_LEVEL", "debug")

    settings = SimulationSettings()

    assert settings.games == 25
    assert settings.seed == 99
    assert settings.strategies == ["greedy", "cautious"]
    assert settings.log_level == "DEBUG"


def test_settings_read_env_file(tmp_path):
    (tmp_path / ".env").write_text("MONOSIM_WORKERS=3\n")
    assert SimulationSettings().workers == 3


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


@pytest.mark.parametrize(
    "overrides",
    [{"player_count": 1}, {"player_count": 9}, {"max_jail_turns": 0}, {"jail_fine": -1}, {"railway_rents": (25, 50)}],
)
def test_invalid_game_config(overrides):
    with pytest.raises(ConfigurationError):
        GameConfig(**overrides)


def test_cli_prints_report(capsys):
    exit_code = cli.main(["-n", "3", "-p", "2", "-r", "20", "--seed", "4", "-s", "greedy"])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "Games played:        3" in out
    assert "BOARD SPACES" in out


def test_cli_writes_csv(tmp_path):
    csv_path = tmp_path / "seats.csv"
    exit_code = cli.main(["-n", "2", "-r", "10", "--seed", "1", "-s", "greedy,random,cautious,never_buy", "--csv", str(csv_path)])

    assert exit_code == 0
    lines = csv_path.read_text().splitlines()
    assert lines[0].startswith("player,strategy,")
    assert len(lines) == 5


def test_cli_rejects_unknown_strategy():
    with pytest.raises(SystemExit):
        cli.main(["-s", "telepathic"])


def test_cli_reports_lineup_mismatch():
    assert cli.main(["-n", "1", "-p", "3", "-s", "greedy,random"]) == 1
