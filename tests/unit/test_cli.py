"""
Unit tests for the command-line interface.
"""

import pytest

from bauhauswiki.__main__ import build_parser, config_from_args


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("WIKI_HOST", "WIKI_PORT", "WIKI_BUFFER_SIZE", "WIKI_READ_TIMEOUT",
                 "WIKI_SEED", "WIKI_LOG_LEVEL", "WIKI_LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)


def parse(*argv: str):
    return config_from_args(build_parser().parse_args(list(argv)))


class TestCLI:
    def test_defaults(self):
        config = parse()

        assert config.host == "0.0.0.0"
        assert config.port == 24439
        assert config.seed is True

    def test_flags(self):
        config = parse(
            "-H", "127.0.0.1", "-p", "8000", "--buffer-size", "2048",
            "--no-seed", "-l", "DEBUG", "--log-format", "json",
        )

        assert config.host == "127.0.0.1"
        assert config.port == 8000
        assert config.buffer_size == 2048
        assert config.seed is False
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"

    def test_flags_override_environment(self, monkeypatch):
        monkeypatch.setenv("WIKI_PORT", "9000")
        monkeypatch.setenv("WIKI_HOST", "10.0.0.1")

        config = parse("--port", "8000")

        assert config.port == 8000
        assert config.host == "10.0.0.1"

    def test_invalid_log_level(self, capsys):
        with pytest.raises(SystemExit):
            parse("--log-level", "LOUD")

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--version"])

        assert exc_info.value.code == 0
        assert "BauhausWiki 1.0.0" in capsys.readouterr().out
