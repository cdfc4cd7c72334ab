"""Managed ``<head>`` block rendering and splicing."""

from __future__ import annotations

import re
from html import escape
from typing import Sequence

from ..logging import get_logger
from ..models import TagDescriptor


class HeadInjector:
    """Writes rendered tags into a document head between hintgen markers."""

    BEGIN = "<!-- hintgen:begin -->"
    END = "<!-- hintgen:end -->"

    _HEAD_OPEN = re.compile(r"<head\b[^>]*>", re.IGNORECASE)
    _HTML_OPEN = re.compile(r"<html\b[^>]*>", re.IGNORECASE)

    def __init__(self) -> None:
        self.logger = get_logger("postproc.head")

    def render(self, tag: TagDescriptor) -> str:
        """Serialise a descriptor; empty values render as bare attributes."""
        parts = [tag.tag]
        for name, value in tag.attrs.items():
            if value == "":
                parts.append(name)
            else:
                parts.append(f'{name}="{escape(value, quote=True)}"')
        return f"<{' '.join(parts)}>"

    def wrap(self, tags: Sequence[TagDescriptor]) -> str:
        """Render tags, in list order, inside the managed markers."""
        lines = [self.BEGIN]
        lines.extend(self.render(tag) for tag in tags)
        lines.append(self.END)
        return "\n".join(lines)

    def inject(self, html: str, tags: Sequence[TagDescriptor]) -> str:
        """Return ``html`` with the tag block at the top of ``<head>``.

        A block left by an earlier run is replaced in place; with no tags the
        existing block is dropped.
        """
        begin = html.find(self.BEGIN)
        end = html.find(self.END, begin + len(self.BEGIN)) if begin != -1 else -1
        if end != -1:
            pre = html[:begin]
            post = html[end + len(self.END):]
            if not tags:
                return pre.removesuffix("\n") + post
            return f"{pre}{self.wrap(tags)}{post}"

        if not tags:
            return html

        block = self.wrap(tags)
        head = self._HEAD_OPEN.search(html)
        if head is not None:
            return f"{html[:head.end()]}\n{block}{html[head.end():]}"

        self.logger.debug("No <head> element found; creating one for hint tags")
        root = self._HTML_OPEN.search(html)
        if root is not None:
            return f"{html[:root.end()]}\n<head>\n{block}\n</head>{html[root.end():]}"
        return f"{block}\n{html}"


__all__ = ["HeadInjector"]
