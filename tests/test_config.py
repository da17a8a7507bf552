from __future__ import annotations

from pathlib import Path

import pytest

from ghreadme.config import ConfigError, EmbedderConfig, SiteConfig, load_site_config, merge_config


def test_from_env_reads_token() -> None:
    assert EmbedderConfig.from_env({"GITHUB_TOKEN": "ghp_x"}).token == "ghp_x"


@pytest.mark.parametrize("environ", [{}, {"GITHUB_TOKEN": ""}])
def test_from_env_without_token(environ: dict[str, str]) -> None:
    assert EmbedderConfig.from_env(environ).token is None


def test_from_env_uses_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_env")
    assert EmbedderConfig.from_env().token == "ghp_env"


def test_invalid_on_error_policy() -> None:
    with pytest.raises(ConfigError):
        EmbedderConfig(on_error="ignore")


def test_load_site_config(tmp_path: Path) -> None:
    path = tmp_path / "_config.yml"
    path.write_text(
        "title: My site\n"
        "baseurl: /blog\n"
        "github_readme:\n"
        "  tag_name: repo\n"
        "  escape: false\n"
        "  on_error: placeholder\n",
        encoding="utf-8",
    )
    site = load_site_config(path)
    assert site.base_url == "/blog"
    assert site.embedder == {"escape": False, "on_error": "placeholder", "tag_name": "repo"}


def test_load_site_config_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "_config.yml"
    path.write_text("", encoding="utf-8")
    assert load_site_config(path) == SiteConfig()


def test_load_site_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_site_config(tmp_path / "nope.yml")


@pytest.mark.parametrize(
    "content",
    [
        "- a\n- b\n",
        "github_readme: 3\n",
        "github_readme:\n  token: abc\n",
        "github_readme:\n  escape: maybe\n",
        "baseurl: [unclosed\n",
        "github_readme: []\n",
        "github_readme: ''\n",
        "github_readme:\n  logo_path:\n",
        "github_readme:\n  tag_name: 3\n",
        "github_readme:\n  api_base: '  '\n",
    ],
)
def test_load_site_config_rejects_bad_content(tmp_path: Path, content: str) -> None:
    path = tmp_path / "_config.yml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_site_config(path)


def test_merge_precedence() -> None:
    site = SiteConfig(base_url="", embedder={"on_error": "placeholder", "logo_path": "/a.svg"})
    config = merge_config(site, {"GITHUB_TOKEN": "env"}, token="cli", logo_path=None, on_error="raise")
    assert config.token == "cli"
    assert config.on_error == "raise"
    assert config.logo_path == "/a.svg"


def test_merge_falls_back_to_env_token() -> None:
    assert merge_config(None, {"GITHUB_TOKEN": "env"}).token == "env"
    assert merge_config(None, {}).token is None


def test_merge_rejects_invalid_site_values() -> None:
    with pytest.raises(ConfigError):
        merge_config(SiteConfig(embedder={"on_error": "retry"}), {})


@pytest.mark.parametrize("token", ["", "   "])
def test_merge_empty_cli_token_keeps_env_token(token: str) -> None:
    assert merge_config(None, {"GITHUB_TOKEN": "env"}, token=token).token == "env"
    assert merge_config(None, {}, token=token).token is None


def test_null_github_readme_section_is_empty(tmp_path: Path) -> None:
    path = tmp_path / "_config.yml"
    path.write_text("baseurl: /x\ngithub_readme:\n", encoding="utf-8")
    assert load_site_config(path) == SiteConfig(base_url="/x")
