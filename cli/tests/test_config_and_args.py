"""Tests for CLI configuration and argument parsing."""

from __future__ import annotations

import pytest

from studio_cli.config import DEFAULT_API_URL, Config
from studio_cli.main import UsageError, parse_args


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("STUDIO_API_URL", raising=False)
    monkeypatch.delenv("STUDIO_SESSION", raising=False)


class TestConfig:
    def test_defaults(self, tmp_path):
        config = Config(config_dir=tmp_path)
        assert config.api_url == DEFAULT_API_URL
        assert not config.is_authenticated

    def test_session_is_per_environment(self, tmp_path):
        local = Config(config_dir=tmp_path)
        local.session = "local-token"
        local.username = "ada"

        remote = Config(api_url_override="https://studio.example.com/", config_dir=tmp_path)
        assert remote.api_url == "https://studio.example.com"
        assert remote.session is None

        reloaded = Config(config_dir=tmp_path)
        assert reloaded.session == "local-token"
        assert reloaded.list_environments() == [
            {"url": DEFAULT_API_URL, "username": "ada", "is_current": True}
        ]

    def test_file_is_owner_only(self, tmp_path):
        config = Config(config_dir=tmp_path)
        config.session = "t"
        assert config.config_file.stat().st_mode & 0o777 == 0o600

    def test_env_overrides(self, tmp_path, monkeypatch):
        monkeypatch.setenv("STUDIO_API_URL", "http://env.test/")
        monkeypatch.setenv("STUDIO_SESSION", "from-env")
        config = Config(api_url_override="http://flag.test", config_dir=tmp_path)

        assert config.api_url == "http://env.test"
        assert config.session == "from-env"

    def test_corrupt_file_is_ignored(self, tmp_path):
        (tmp_path / "config.json").write_text("{not json")
        config = Config(config_dir=tmp_path)
        assert config.list_environments() == []

    def test_clear(self, tmp_path):
        config = Config(config_dir=tmp_path)
        config.session = "t"
        config.clear_environment()
        assert not config.is_authenticated

        config.session = "t"
        config.clear_all()
        assert not config.config_file.exists()


class TestParseArgs:
    def test_command_and_positionals(self):
        opts = parse_args(["push", "p1", "index.html", "./index.html"])
        assert opts["command"] == "push"
        assert opts["args"] == ["p1", "index.html", "./index.html"]

    def test_options_anywhere(self):
        opts = parse_args(["--api-url", "http://x", "preview", "p1", "--device", "tablet", "--out", "o.html"])
        assert opts["api_url"] == "http://x"
        assert opts["device"] == "tablet"
        assert opts["out"] == "o.html"
        assert opts["args"] == ["p1"]

    def test_flags(self):
        opts = parse_args(["add", "p1", "assets", "--folder"])
        assert opts["folder"] is True

    def test_data_uri_flag(self):
        opts = parse_args(["preview", "p1", "--data-uri"])
        assert opts["data_uri"] is True
        assert parse_args(["preview", "p1"])["data_uri"] is False

    def test_debounce_is_int(self):
        assert parse_args(["watch", "p1", "--debounce-ms", "250"])["debounce_ms"] == 250
        assert parse_args(["watch", "p1"])["debounce_ms"] == 100

    @pytest.mark.parametrize(
        "argv",
        [["--out"], ["tree", "--bogus"], ["watch", "p1", "--debounce-ms", "soon"]],
    )
    def test_usage_errors(self, argv):
        with pytest.raises(UsageError):
            parse_args(argv)
