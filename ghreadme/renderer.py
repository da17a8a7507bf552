"""
renderer.py

Responsibility: Expand `{% github ... %}` tags across a site source tree.

Rules:
- Walk source files in sorted order to ensure deterministic output.
- Skip anything whose path has a component starting with `_` or `.`
  (site config, drafts, VCS metadata) and anything under the destination.
- For UTF-8 text files containing the tag, replace each occurrence with the
  rendered fragment; one embedder (and two API calls) per occurrence.
- Everything else is copied byte-for-byte.

This module intentionally does NOT talk to GitHub directly.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from ghreadme.config import EmbedderConfig
from ghreadme.embedder import ReadmeEmbedder, RenderContext
from ghreadme.github_client import GitHubClient

logger = logging.getLogger(__name__)


class RenderError(RuntimeError):
    pass


@dataclass(frozen=True)
class RenderResult:
    rendered_files: int
    copied_files: int
    embedded_tags: int


def _tag_pattern(tag_name: str) -> re.Pattern[str]:
    return re.compile(r"\{%-?\s*" + re.escape(tag_name) + r"\s+(.*?)\s*-?%\}")


def find_tags(text: str, tag_name: str = "github") -> Iterator[re.Match[str]]:
    return _tag_pattern(tag_name).finditer(text)


def expand_tags(
    text: str,
    *,
    context: RenderContext,
    config: EmbedderConfig,
    client: GitHubClient | None = None,
) -> tuple[str, int]:
    """
    Replace every tag in `text` with its fragment. Returns (new_text, tag_count).
    """
    count = 0

    def _replace(match: re.Match[str]) -> str:
        nonlocal count
        embedder = ReadmeEmbedder(match.group(1), config, client=client)
        count += 1
        return embedder.render(context)

    out = _tag_pattern(config.tag_name).sub(_replace, text)
    return out, count


def _read_text(path: Path) -> str | None:
    """
    Best-effort: None if the file cannot be decoded as UTF-8.
    """
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        return None


def _is_hidden(rel: Path) -> bool:
    return any(part.startswith(("_", ".")) for part in rel.parts)


def _iter_source_files(source_dir: Path, exclude: Path) -> list[Path]:
    """
    Return publishable files under source_dir, in deterministic lexicographic
    order (relative path ordering).
    """
    files: list[Path] = []
    for root, dirs, filenames in os.walk(source_dir):
        root_path = Path(root)
        dirs[:] = [
            d
            for d in dirs
            if not d.startswith(("_", ".")) and (root_path / d).resolve() != exclude
        ]
        for name in filenames:
            path = root_path / name
            if not _is_hidden(path.relative_to(source_dir)):
                files.append(path)
    files.sort(key=lambda p: str(p.relative_to(source_dir)).replace(os.sep, "/"))
    return files


def render_site(
    *,
    source_dir: str | Path,
    destination_dir: str | Path,
    context: RenderContext,
    config: EmbedderConfig,
    client: GitHubClient | None = None,
) -> RenderResult:
    """
    Render/copy a site source tree into destination_dir.

    - Creates destination directories as needed.
    - Copies file permissions from source files.
    - API failures propagate unless `config.on_error` is "placeholder".
    """
    src_dir = Path(source_dir).resolve()
    dst_dir = Path(destination_dir).resolve()

    if not src_dir.exists() or not src_dir.is_dir():
        raise RenderError(f"Source directory not found: {src_dir}")
    if src_dir == dst_dir:
        raise RenderError("Destination directory must differ from the source directory.")

    rendered = 0
    copied = 0
    tags = 0

    for src_path in _iter_source_files(src_dir, dst_dir):
        rel = src_path.relative_to(src_dir)
        dst_path = dst_dir / rel
        dst_path.parent.mkdir(parents=True, exist_ok=True)

        text = _read_text(src_path)
        if text is None or next(find_tags(text, config.tag_name), None) is None:
            shutil.copy2(src_path, dst_path)
            copied += 1
            continue

        out, count = expand_tags(text, context=context, config=config, client=client)
        dst_path.write_text(out, encoding="utf-8", newline="\n")
        shutil.copystat(src_path, dst_path)
        logger.info("Embedded %d README(s) in %s", count, rel.as_posix())
        rendered += 1
        tags += count

    return RenderResult(rendered_files=rendered, copied_files=copied, embedded_tags=tags)
