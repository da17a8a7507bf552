"""
ghreadme package

This package embeds a GitHub repository's README and metadata into static site
pages through a `{% github owner/repo %}` template tag.

Key responsibilities are split across modules:
- `embedder.py`: the tag itself (parse the reference, fetch, render)
- `fragment.py`: the fixed HTML fragment template
- `github_client.py`: isolated GitHub REST API interactions (README / repo lookup)
- `renderer.py`: tag expansion across a site source tree
- `config.py`: embedder options and host site config
- `cli.py`: CLI entrypoint and orchestration (config -> render -> write)
"""

from __future__ import annotations

from ghreadme.embedder import ReadmeEmbedder, RenderContext, parse_repo_reference

__all__ = ["ReadmeEmbedder", "RenderContext", "parse_repo_reference", "__version__"]

__version__ = "0.1.0"
