"""
embedder.py

Responsibility: The `github` tag itself.

A `ReadmeEmbedder` lives for one tag occurrence and works in two phases:
1) construction (tag-parse time): derive `owner/name`, fetch README HTML and
   repository metadata from GitHub
2) render (template-render time): compute the logo URL from the site's base
   URL and fill the HTML fragment
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

import requests

from ghreadme.config import EmbedderConfig
from ghreadme.fragment import FragmentFields, render_fragment, render_placeholder
from ghreadme.github_client import GitHubClient, GitHubError, RepoInfo

logger = logging.getLogger(__name__)

_GITHUB_PREFIX_RE = re.compile(r".*github\.com/")


def parse_repo_reference(text: str) -> str:
    """
    Turn a tag argument into `owner/name`.

    Everything up to and including the last `github.com/` is dropped and the
    rest is stripped. Nothing else is checked; the API rejects bad input.
    """
    return _GITHUB_PREFIX_RE.sub("", text).strip()


@dataclass(frozen=True)
class RenderContext:
    """What the host site exposes at render time."""

    base_url: str | None = ""


class ReadmeEmbedder:
    def __init__(
        self,
        text: str,
        config: EmbedderConfig | None = None,
        *,
        client: GitHubClient | None = None,
    ) -> None:
        self.config = config or EmbedderConfig()
        self.ref = parse_repo_reference(text)
        self.error: Exception | None = None
        self.repo: RepoInfo | None = None
        self.readme_html = ""

        if client is None:
            client = GitHubClient(self.config.token, self.config.api_base)
        self.client = client

        try:
            self.readme_html = client.get_readme_html(self.ref)
            self.repo = client.get_repo(self.ref)
        except (GitHubError, requests.RequestException) as e:
            if self.config.on_error != "placeholder":
                raise
            logger.warning("Could not embed README for %r: %s", self.ref, e)
            self.error = e

    def logo_url(self, context: RenderContext) -> str:
        return f"{context.base_url or ''}{self.config.logo_path}"

    def render(self, context: RenderContext) -> str:
        logo_url = self.logo_url(context)
        if self.repo is None:
            return render_placeholder(self.ref, logo_url=logo_url)
        fields = FragmentFields(
            logo_url=logo_url,
            owner=self.repo.owner,
            repo_url=self.repo.html_url,
            name=self.repo.name,
            description=self.repo.description,
            readme_html=self.readme_html,
        )
        return render_fragment(fields, escape=self.config.escape)
