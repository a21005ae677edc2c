import pytest

import crawlshot.core.config as config_module  # type: ignore[import]

from tests.helpers.crawlshot_imports import (
    ConfigurationError,
    CrawlConfig,
    LinkFilter,
    ViewportOptions,
    load_configuration,
)

ENV_KEYS = ["HEADLESS", "CRAWLSHOT_OUTPUT_DIR", "CRAWLSHOT_USER_AGENT"]


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch):
    monkeypatch.setattr(config_module, "load_dotenv", lambda *_args, **_kwargs: False)
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_load_configuration_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)

    config = load_configuration(["https://example.com/"])

    assert config.seed_urls == ("https://example.com/",)
    assert config.output_dir == tmp_path.resolve()
    assert config.tabs == 2
    assert config.max_depth == 1
    assert config.recursive is False
    assert config.headless is True
    assert config.user_agent is None
    assert config.javascript_enabled is True
    assert config.link_filter == LinkFilter()


def test_load_configuration_uses_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("HEADLESS", "false")
    monkeypatch.setenv("CRAWLSHOT_OUTPUT_DIR", str(tmp_path / "shots"))
    monkeypatch.setenv("CRAWLSHOT_USER_AGENT", "env-agent")

    config = load_configuration(["https://example.com/"])

    assert config.headless is False
    assert config.output_dir == (tmp_path / "shots").resolve()
    assert config.user_agent == "env-agent"


def test_explicit_values_win_over_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("CRAWLSHOT_OUTPUT_DIR", str(tmp_path / "env"))
    monkeypatch.setenv("CRAWLSHOT_USER_AGENT", "env-agent")

    config = load_configuration(
        ["https://example.com/"],
        output_dir=str(tmp_path / "cli"),
        user_agent="cli-agent",
    )

    assert config.output_dir == (tmp_path / "cli").resolve()
    assert config.user_agent == "cli-agent"


def test_invalid_pattern_fails_fast(tmp_path):
    with pytest.raises(ConfigurationError):
        load_configuration(["https://example.com/"], link_filter=LinkFilter(pattern="(unclosed"))


@pytest.mark.parametrize("overrides", [{"tabs": 0}, {"max_depth": 0}])
def test_invalid_counts_are_rejected(tmp_path, overrides):
    with pytest.raises(ConfigurationError):
        CrawlConfig(seed_urls=("https://example.com/",), output_dir=tmp_path, **overrides)


def test_landscape_viewport_rotates_portrait_sizes():
    assert ViewportOptions(width=375, height=812, is_landscape=True).size == {
        "width": 812,
        "height": 375,
    }
    assert ViewportOptions(width=1920, height=1080, is_landscape=True).size == {
        "width": 1920,
        "height": 1080,
    }
