"""Tests for gitstock.config: settings loading and scoring defaults."""

import dataclasses

import pytest

from gitstock.config import DEFAULT_SCORING, ScoringConfig, load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    """Clear gitstock env vars and keep load_dotenv away from real .env files."""
    for var in [
        "GITHUB_TOKEN",
        "GITHUB_GRAPHQL_URL",
        "GITHUB_TIMEOUT",
        "PORT",
        "LOG_LEVEL",
        "CORS_ORIGINS",
    ]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


class TestLoadSettings:
    def test_defaults(self, tmp_path):
        cfg = load_settings(str(tmp_path / "missing.env"))
        assert cfg.github_token == ""
        assert cfg.github_graphql_url == "https://api.github.com/graphql"
        assert cfg.github_timeout == 10.0
        assert cfg.port == 3001
        assert cfg.log_level == "INFO"
        assert cfg.cors_origins == ("*",)

    def test_reads_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_abc")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("GITHUB_TIMEOUT", "2.5")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
        cfg = load_settings(str(tmp_path / "missing.env"))
        assert cfg.github_token == "ghp_abc"
        assert cfg.port == 8080
        assert cfg.github_timeout == 2.5
        assert cfg.log_level == "DEBUG"
        assert cfg.cors_origins == ("https://a.example", "https://b.example")

    def test_reads_dotenv_file(self, monkeypatch, tmp_path):
        env_file = tmp_path / "test.env"
        env_file.write_text("GITHUB_TOKEN=ghp_from_file\nPORT=4000\n")
        cfg = load_settings(str(env_file))
        assert cfg.github_token == "ghp_from_file"
        assert cfg.port == 4000
        # load_dotenv writes into os.environ; the fixture cleans up
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        monkeypatch.delenv("PORT", raising=False)

    def test_invalid_port(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PORT", "eighty")
        with pytest.raises(ValueError, match="PORT"):
            load_settings(str(tmp_path / "missing.env"))

    def test_settings_frozen(self, tmp_path):
        cfg = load_settings(str(tmp_path / "missing.env"))
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.port = 1


class TestScoringConfig:
    def test_defaults(self):
        assert DEFAULT_SCORING.milestones == (100, 500, 1000, 2500, 5000)
        assert DEFAULT_SCORING.baselines.yearly_contributions == 1000
        assert DEFAULT_SCORING.inactivity_penalty == 0.3

    def test_weights_sum_to_one(self):
        w = DEFAULT_SCORING.weights
        total = (w.volume + w.consistency + w.recognition
                 + w.social_proof + w.momentum)
        assert total == pytest.approx(1.0)

    def test_override_keeps_other_defaults(self):
        cfg = dataclasses.replace(ScoringConfig(), price_floor=2.0)
        assert cfg.price_floor == 2.0
        assert cfg.ipo_base == DEFAULT_SCORING.ipo_base
