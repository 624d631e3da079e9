"""Tests for the command line interface."""

from typer.testing import CliRunner

from wikifeeds.cli import app
from wikifeeds.cli import most_read as most_read_module
from wikifeeds.config import load_config
from wikifeeds.models import FeedMeta, MostReadFeed, MostReadResponse

runner = CliRunner()


def test_init_writes_config(tmp_path):
    path = tmp_path / "config.yaml"
    result = runner.invoke(app, ["init", "--config", str(path), "--user-agent", "Tester/1.0"])

    assert result.exit_code == 0
    config = load_config(path)
    assert config.upstream.user_agent == "Tester/1.0"
    assert config.upstream.user_agent_env == "WIKIFEEDS_USER_AGENT"


def test_init_refuses_overwrite(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("log_level: DEBUG\n", encoding="utf-8")

    result = runner.invoke(app, ["init", "--config", str(path)])
    assert result.exit_code == 1
    assert path.read_text(encoding="utf-8") == "log_level: DEBUG\n"


def test_most_read_invalid_date(tmp_path):
    result = runner.invoke(
        app,
        ["most-read", "en.wikipedia.org", "2017", "02", "30", "--config", str(tmp_path / "none.yaml")],
    )
    assert result.exit_code == 1
    assert "Invalid date" in result.output


def test_most_read_year_out_of_range(tmp_path):
    result = runner.invoke(
        app,
        [
            "most-read", "en.wikipedia.org", "99999999999999999999", "01", "01",
            "--config", str(tmp_path / "none.yaml"),
        ],
    )
    assert result.exit_code == 1
    assert "Invalid date" in result.output


def test_most_read_json_prints_headers(tmp_path, monkeypatch):
    response = MostReadResponse(
        payload=MostReadFeed(date="2017-01-10Z", articles=[]),
        meta=FeedMeta(revision="20170110", vary="accept-language"),
    )
    monkeypatch.setattr(most_read_module, "most_read_sync", lambda *args, **kwargs: response)

    result = runner.invoke(
        app,
        [
            "most-read", "en.wikipedia.org", "2017", "01", "10", "--json",
            "--config", str(tmp_path / "none.yaml"),
        ],
    )
    assert result.exit_code == 0
    assert '"date": "2017-01-10Z"' in result.output
    assert 'etag: "20170110/' in result.output
    assert "vary: accept-language" in result.output
