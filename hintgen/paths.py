"""Page identifier normalisation."""

from __future__ import annotations

import os
import posixpath


def canonicalize_page_path(
    page_path: str | os.PathLike[str], site_root: str | os.PathLike[str]
) -> str:
    """Return the site-rooted identifier for a page, e.g. ``/blog/index.html``.

    Backslashes are treated as separators regardless of platform so a page
    gets the same identifier on Windows and POSIX hosts.
    """
    page = os.fspath(page_path).replace("\\", "/")
    root = os.fspath(site_root).replace("\\", "/")
    relative = posixpath.relpath(page, root) if root else page
    return "/" + relative.lstrip("/")


__all__ = ["canonicalize_page_path"]
