"""Scanner for ``<img data-preload>`` elements in raw HTML."""

from __future__ import annotations

import re
from html import unescape
from typing import Dict, List, Optional

from .logging import get_logger
from .models import TagDescriptor, link_tag

_LOGGER = get_logger("images")

PRELOAD_MARKER = "data-preload"
DARK_CLASS = "has-dark"

_IMG_TAG = re.compile(r"""<img\b((?:[^>"']|"[^"]*"|'[^']*')*)>""", re.IGNORECASE)
_ATTRIBUTE = re.compile(
    r"""([^\s"'=<>/`]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+)))?"""
)
_EXTENSION = re.compile(r"(\.\w+)$")


def dark_variant(src: str) -> Optional[str]:
    """Return ``src`` with ``-dark`` before its extension, or None without one.

    ``assets/icons/logo.svg`` becomes ``assets/icons/logo-dark.svg``.
    """
    if not _EXTENSION.search(src):
        return None
    return _EXTENSION.sub(r"-dark\1", src, count=1)


def parse_attributes(tag_body: str) -> Dict[str, str]:
    """Parse the attribute section of an opening tag into a name -> value map.

    Names are lower-cased; the first occurrence of a repeated name wins and
    valueless attributes map to an empty string. Character references in
    values are decoded.
    """
    attributes: Dict[str, str] = {}
    for match in _ATTRIBUTE.finditer(tag_body):
        name = match.group(1).lower()
        if name in attributes:
            continue
        value = next((group for group in match.groups()[1:] if group is not None), "")
        attributes[name] = unescape(value)
    return attributes


class ImagePreloadScanner:
    """Emits image preloads for ``<img>`` tags carrying ``data-preload``."""

    def scan(self, html: str) -> List[TagDescriptor]:
        """Return preload descriptors in document order.

        Each marked image yields its own preload, followed by a preload for
        its dark variant when the tag has the ``has-dark`` class.
        """
        tags: List[TagDescriptor] = []
        for match in _IMG_TAG.finditer(html):
            attributes = parse_attributes(match.group(1))
            src = attributes.get("src", "")
            if PRELOAD_MARKER not in attributes or not src:
                continue

            tags.append(link_tag({"rel": "preload", "href": src, "as": "image"}))

            if DARK_CLASS not in attributes.get("class", "").split():
                continue
            dark_src = dark_variant(src)
            if dark_src is None:
                _LOGGER.warning(
                    "Image %s has class %s but no file extension; skipping dark preload",
                    src,
                    DARK_CLASS,
                )
                continue
            tags.append(link_tag({"rel": "preload", "href": dark_src, "as": "image"}))

        _LOGGER.debug("Found %d image preload(s) in markup", len(tags))
        return tags


__all__ = ["DARK_CLASS", "ImagePreloadScanner", "PRELOAD_MARKER", "dark_variant", "parse_attributes"]
