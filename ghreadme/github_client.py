"""
github_client.py

Responsibility: Isolate all direct GitHub REST API interaction.

This module must be the only place that:
- Constructs GitHub REST endpoints
- Sends HTTP requests to api.github.com
- Interprets GitHub API responses / error payloads

The embedder only ever asks for two things: the rendered README of a repository
and its metadata. No retries and no caching happen here; errors propagate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.github.com"

JSON_MEDIA_TYPE = "application/vnd.github+json"
HTML_MEDIA_TYPE = "application/vnd.github.html"


class GitHubError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class RepoInfo:
    owner: str
    name: str
    html_url: str
    description: str | None = None


class GitHubClient:
    def __init__(
        self,
        token: str | None = None,
        api_base: str = DEFAULT_API_BASE,
        *,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        self._token = token.strip() if token and token.strip() else None
        self._api_base = api_base.rstrip("/")
        self._session = session
        self._timeout = timeout

    @property
    def authenticated(self) -> bool:
        return self._token is not None

    def _headers(self, accept: str = JSON_MEDIA_TYPE) -> dict[str, str]:
        headers = {
            "Accept": accept,
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "ghreadme",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _get(self, path: str, *, accept: str = JSON_MEDIA_TYPE) -> requests.Response:
        url = f"{self._api_base}{path}"
        logger.debug("GET %s (accept=%s, authenticated=%s)", url, accept, self.authenticated)
        get = self._session.get if self._session is not None else requests.get
        r = get(url, headers=self._headers(accept), timeout=self._timeout)
        if r.status_code >= 400:
            try:
                payload: Any = r.json()
            except ValueError:
                payload = {"message": r.text}
            message = payload.get("message", payload) if isinstance(payload, dict) else payload
            raise GitHubError(
                f"GitHub API error {r.status_code} GET {path}: {message}",
                status_code=r.status_code,
            )
        return r

    def get_readme_html(self, ref: str) -> str:
        """
        Return the README of `ref` (`owner/name`) as HTML rendered by GitHub.
        """
        return self._get(f"/repos/{ref}/readme", accept=HTML_MEDIA_TYPE).text

    def get_repo(self, ref: str) -> RepoInfo:
        data = self._get(f"/repos/{ref}").json()
        return RepoInfo(
            owner=data["owner"]["login"],
            name=data["name"],
            html_url=data["html_url"],
            description=data.get("description"),
        )
