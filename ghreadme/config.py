"""
config.py

Responsibility: Load host site configuration and build embedder options.

Sources, highest precedence first:
- explicit overrides (CLI flags)
- environment (`GITHUB_TOKEN` only)
- the `github_readme:` section of the site's YAML config (`_config.yml`)
- defaults on `EmbedderConfig`
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from ghreadme.github_client import DEFAULT_API_BASE

TOKEN_ENV_VAR = "GITHUB_TOKEN"
DEFAULT_TAG_NAME = "github"
DEFAULT_LOGO_PATH = "/assets/images/github_logo.svg"
ON_ERROR_POLICIES = ("raise", "placeholder")


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class EmbedderConfig:
    """Options for a single `ReadmeEmbedder`."""

    token: str | None = None
    api_base: str = DEFAULT_API_BASE
    tag_name: str = DEFAULT_TAG_NAME
    logo_path: str = DEFAULT_LOGO_PATH
    escape: bool = True
    on_error: str = "raise"

    def __post_init__(self) -> None:
        if self.on_error not in ON_ERROR_POLICIES:
            raise ConfigError(f"`on_error` must be one of {', '.join(ON_ERROR_POLICIES)}; got {self.on_error!r}")
        if not self.tag_name or not self.tag_name.strip():
            raise ConfigError("`tag_name` must be a non-empty string.")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> EmbedderConfig:
        """
        Build a config whose token comes from `GITHUB_TOKEN`; unset or empty means no token.
        """
        env = os.environ if environ is None else environ
        token = env.get(TOKEN_ENV_VAR) or None
        return cls(token=token, **overrides)


@dataclass(frozen=True)
class SiteConfig:
    """Host site settings the embedder cares about."""

    base_url: str = ""
    embedder: dict[str, Any] = field(default_factory=dict)


_EMBEDDER_KEYS = {"api_base", "tag_name", "logo_path", "escape", "on_error"}


def parse_site_config(data: Any) -> SiteConfig:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Site config must be a mapping/object at the top level.")

    base_url = data.get("baseurl")
    base_url = "" if base_url is None else str(base_url).strip()

    raw = data.get("github_readme")
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError("`github_readme` must be an object/mapping when provided.")

    unknown = sorted(set(raw) - _EMBEDDER_KEYS)
    if unknown:
        # `token` is accepted only from the environment or CLI.
        raise ConfigError(f"Unknown `github_readme` option(s): {', '.join(map(str, unknown))}")

    embedder: dict[str, Any] = {}
    for key in sorted(raw):
        value = raw[key]
        if key == "escape":
            if not isinstance(value, bool):
                raise ConfigError("`github_readme.escape` must be a boolean.")
            embedder[key] = value
        elif isinstance(value, str) and value.strip():
            embedder[key] = value.strip()
        else:
            raise ConfigError(f"`github_readme.{key}` must be a non-empty string.")

    return SiteConfig(base_url=base_url, embedder=embedder)


def load_site_config(path: str | Path) -> SiteConfig:
    """
    Parse a Jekyll-style YAML site config.

    Recognised keys:
    - baseurl: str
    - github_readme.api_base / tag_name / logo_path / on_error: str
    - github_readme.escape: bool
    """
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Site config does not exist: {p}")
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Site config is not valid YAML: {p}") from e
    return parse_site_config(data)


def merge_config(
    site: SiteConfig | None = None,
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> EmbedderConfig:
    site = site or SiteConfig()
    config = EmbedderConfig.from_env(environ, **site.embedder)
    explicit = {k: v for k, v in overrides.items() if v is not None}
    if "token" in explicit and not explicit["token"].strip():
        # An empty CLI token leaves the environment token in place.
        del explicit["token"]
    return replace(config, **explicit) if explicit else config
