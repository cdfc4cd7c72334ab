"""Page and site level orchestration of hint generation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Sequence

from .config import PreloadOptions
from .logging import get_logger
from .models import TagDescriptor
from .paths import canonicalize_page_path
from .postproc.head import HeadInjector
from .tags import TagBuilder

_EXCLUDED_DIRS = {".git", "node_modules", "__pycache__"}


@dataclass(frozen=True)
class PageTransform:
    """HTML handed back to the host together with the tags to splice."""

    html: str
    tags: Sequence[TagDescriptor]


@dataclass
class PageOutcome:
    """Result of processing one page of a built site."""

    path: Path
    page_id: str
    tags: Sequence[TagDescriptor]
    changed: bool


def transform_page(
    html: str,
    *,
    page_path: str | os.PathLike[str],
    site_root: str | os.PathLike[str],
    output_files: Iterable[str] | Mapping[str, Any] | None,
    options: PreloadOptions | None = None,
) -> PageTransform:
    """Compute the hint tags for one page without touching its markup."""
    page_id = canonicalize_page_path(page_path, site_root)
    tags = TagBuilder().build(html, page_id, output_files, options or PreloadOptions())
    return PageTransform(html=html, tags=tuple(tags))


def collect_output_files(dist: Path) -> List[str]:
    """Return every file under ``dist`` as a sorted, slash-separated relative name."""
    names: List[str] = []
    for current, dirs, files in os.walk(dist):
        dirs[:] = sorted(d for d in dirs if d not in _EXCLUDED_DIRS)
        for file_name in files:
            relative = (Path(current) / file_name).relative_to(dist)
            names.append(relative.as_posix())
    return sorted(names)


class PreloadPipeline:
    """Injects hint tags into every HTML page of a built site directory."""

    def __init__(self, options: PreloadOptions | None = None) -> None:
        self.options = options or PreloadOptions()
        self.injector = HeadInjector()
        self.logger = get_logger("pipeline")

    def run(self, dist: Path | str, *, dry_run: bool = False) -> List[PageOutcome]:
        site_root = Path(dist).expanduser().resolve()
        if not site_root.is_dir():
            raise FileNotFoundError(f"Build directory not found: {site_root}")

        output_files = collect_output_files(site_root)
        pages = [name for name in output_files if name.endswith(".html")]
        self.logger.info("Processing %d page(s) in %s", len(pages), site_root)
        self.logger.debug("Build output contains %d file(s)", len(output_files))

        outcomes: List[PageOutcome] = []
        for name in pages:
            path = site_root / name
            html = path.read_text(encoding="utf-8")
            result = transform_page(
                html,
                page_path=path,
                site_root=site_root,
                output_files=output_files,
                options=self.options,
            )
            updated = self.injector.inject(result.html, result.tags)
            changed = updated != html
            page_id = canonicalize_page_path(path, site_root)
            outcomes.append(
                PageOutcome(path=path, page_id=page_id, tags=result.tags, changed=changed)
            )

            if not changed:
                self.logger.debug("%s already up to date", page_id)
                continue
            if dry_run:
                self.logger.info("Would inject %d tag(s) into %s", len(result.tags), page_id)
                continue
            path.write_text(updated, encoding="utf-8")
            self.logger.info("Injected %d tag(s) into %s", len(result.tags), page_id)

        return outcomes


__all__ = [
    "PageOutcome",
    "PageTransform",
    "PreloadPipeline",
    "collect_output_files",
    "transform_page",
]
