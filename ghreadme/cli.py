"""
cli.py

Responsibility: CLI entrypoint for ghreadme.

Commands:
- `build`: expand `{% github ... %}` tags across a site source tree
- `render`: print the fragment for a single repository

This module should orchestrate behavior but keep concerns isolated:
- Configuration: `config.py`
- Tag expansion / file walking: `renderer.py`
- GitHub API: `github_client.py`
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path

import requests

from ghreadme.config import ON_ERROR_POLICIES, ConfigError, SiteConfig, load_site_config, merge_config
from ghreadme.embedder import ReadmeEmbedder, RenderContext
from ghreadme.github_client import GitHubError
from ghreadme.renderer import RenderError, render_site

logger = logging.getLogger(__name__)


class CLIError(RuntimeError):
    pass


def _prepare_destination(path: Path, *, overwrite: bool) -> None:
    if path.exists() and any(path.iterdir()):
        if not overwrite:
            raise CLIError(f"Destination is not empty: {path} (use --overwrite to allow)")
        shutil.rmtree(path)
    path.mkdir(parents=True, exist_ok=True)


def _load_site(args: argparse.Namespace, default_path: Path | None) -> SiteConfig:
    if args.config:
        return load_site_config(args.config)
    if default_path is not None and default_path.exists():
        return load_site_config(default_path)
    return SiteConfig()


def _context(args: argparse.Namespace, site: SiteConfig) -> RenderContext:
    base_url = site.base_url if args.base_url is None else args.base_url
    return RenderContext(base_url=base_url.rstrip("/"))


def build_cmd(args: argparse.Namespace) -> int:
    source = Path(args.source).resolve()
    if not source.is_dir():
        raise CLIError(f"Source directory not found: {source}")

    site = _load_site(args, source / "_config.yml")
    config = merge_config(
        site,
        token=args.github_token,
        on_error=args.on_error,
        escape=False if args.no_escape else None,
    )
    if not config.token:
        logger.warning("GITHUB_TOKEN not set. Using unauthenticated requests (limited rate).")

    destination = Path(args.destination or source / "_site").resolve()
    if source == destination or source.is_relative_to(destination):
        raise CLIError(f"Destination must not be the source directory or contain it: {destination}")
    _prepare_destination(destination, overwrite=bool(args.overwrite))

    result = render_site(
        source_dir=source,
        destination_dir=destination,
        context=_context(args, site),
        config=config,
    )
    logger.info(
        "Build complete: %d file(s) rendered, %d copied, %d README(s) embedded -> %s",
        result.rendered_files,
        result.copied_files,
        result.embedded_tags,
        destination,
    )
    return 0


def render_cmd(args: argparse.Namespace) -> int:
    site = _load_site(args, None)
    config = merge_config(
        site,
        token=args.github_token,
        escape=False if args.no_escape else None,
    )
    embedder = ReadmeEmbedder(args.repo, config)
    sys.stdout.write(embedder.render(_context(args, site)))
    return 0


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", default=None, help="Site config YAML (default: SOURCE/_config.yml for build)")
    p.add_argument("--base-url", default=None, help="Site base URL (overrides `baseurl` from the config)")
    p.add_argument("--github-token", default=None, help="GitHub token (or set env GITHUB_TOKEN)")
    p.add_argument("--no-escape", action="store_true", help="Do not HTML-escape repository metadata")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ghreadme", description="Embed GitHub READMEs into static site pages")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    b = sub.add_parser("build", help="Expand README tags across a site source tree")
    b.add_argument("source", help="Site source directory")
    b.add_argument("--destination", default=None, help="Output directory (default: SOURCE/_site)")
    b.add_argument("--overwrite", action="store_true", help="Allow a non-empty destination (it is cleared)")
    b.add_argument(
        "--on-error",
        choices=ON_ERROR_POLICIES,
        default=None,
        help="What to do when GitHub cannot be reached: abort the build (raise) or embed a placeholder",
    )
    _add_common_args(b)
    b.set_defaults(func=build_cmd)

    r = sub.add_parser("render", help="Print the README fragment for one repository")
    r.add_argument("repo", help="owner/name or https://github.com/owner/name")
    _add_common_args(r)
    r.set_defaults(func=render_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        return int(args.func(args))
    except (CLIError, ConfigError, GitHubError, RenderError, requests.RequestException) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
