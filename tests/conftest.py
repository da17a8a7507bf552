from __future__ import annotations

import pytest

from ghreadme.github_client import RepoInfo
from tests.fakes import API, HELLO_WORLD, FakeClient, FakeResponse, FakeSession


@pytest.fixture
def hello_session() -> FakeSession:
    return FakeSession(
        {
            f"{API}/repos/octocat/Hello-World/readme": FakeResponse(200, text="<p>hi</p>"),
            f"{API}/repos/octocat/Hello-World": FakeResponse(200, HELLO_WORLD),
        }
    )


@pytest.fixture
def hello_client() -> FakeClient:
    info = RepoInfo(
        owner="octocat",
        name="Hello-World",
        html_url="https://github.com/octocat/Hello-World",
        description="My first repo",
    )
    return FakeClient({"octocat/Hello-World": (info, "<p>hi</p>")})
