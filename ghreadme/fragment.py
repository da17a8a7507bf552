"""
fragment.py

Responsibility: The fixed HTML fragment an embedded README is rendered into.

Class names and nesting are part of the output contract (site stylesheets
target them) and must not change.
"""

from __future__ import annotations

from dataclasses import dataclass

from jinja2 import Environment, StrictUndefined
from markupsafe import Markup

FRAGMENT_TEMPLATE = """\
<div class="readme_container">
  <div class="readme_overview">
    <h2>
      <img class="readme_github_logo" src="{{ logo_url }}" alt="GitHub logo">
      <a href="{{ profile_url }}">{{ owner }}</a>
      /
      <a style="font-weight: 600;" href="{{ repo_url }}">{{ name }}</a>
    </h2>
    <h3>{{ description or "" }}</h3>
  </div>
  <div class="github_readme_body">
    <p>
    {{ readme_html }}
    </p>
  </div>
  <div class="github_button_container">
    <a class="github_button" href="{{ repo_url }}">View on GitHub</a>
  </div>
</div>
"""

PLACEHOLDER_TEMPLATE = """\
<div class="readme_container readme_error">
  <div class="readme_overview">
    <h2>
      <img class="readme_github_logo" src="{{ logo_url }}" alt="GitHub logo">
      <a href="https://github.com/{{ ref }}">{{ ref }}</a>
    </h2>
    <h3>README unavailable</h3>
  </div>
</div>
"""

GITHUB_WEB_BASE = "https://github.com"


@dataclass(frozen=True)
class FragmentFields:
    logo_url: str
    owner: str
    repo_url: str
    name: str
    description: str | None
    readme_html: str

    @property
    def profile_url(self) -> str:
        return f"{GITHUB_WEB_BASE}/{self.owner}"


def _environment(escape: bool) -> Environment:
    return Environment(
        autoescape=escape,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


def render_fragment(fields: FragmentFields, *, escape: bool = True) -> str:
    """
    Fill the fragment template.

    With `escape` on, owner, name, description and URLs are HTML-escaped.
    The README is GitHub-rendered HTML and is always inserted as-is.
    """
    template = _environment(escape).from_string(FRAGMENT_TEMPLATE)
    return template.render(
        logo_url=fields.logo_url,
        profile_url=fields.profile_url,
        owner=fields.owner,
        repo_url=fields.repo_url,
        name=fields.name,
        description=fields.description,
        readme_html=Markup(fields.readme_html),
    )


def render_placeholder(ref: str, *, logo_url: str) -> str:
    template = _environment(True).from_string(PLACEHOLDER_TEMPLATE)
    return template.render(ref=ref, logo_url=logo_url)
