"""Core data models shared across hintgen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

HEAD_PREPEND = "head-prepend"


@dataclass(frozen=True)
class TagDescriptor:
    """A single tag to splice into the document head.

    ``attrs`` keeps insertion order; an empty string value renders as a bare
    boolean attribute (``crossorigin``).
    """

    tag: str = "link"
    inject_to: str = HEAD_PREPEND
    attrs: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attrs", MappingProxyType(dict(self.attrs)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TagDescriptor):
            return NotImplemented
        return (
            self.tag == other.tag
            and self.inject_to == other.inject_to
            and dict(self.attrs) == dict(other.attrs)
        )

    def __hash__(self) -> int:
        return hash((self.tag, self.inject_to, frozenset(self.attrs.items())))


def link_tag(attrs: Mapping[str, str]) -> TagDescriptor:
    """Build a head-prepended ``<link>`` descriptor."""
    return TagDescriptor(tag="link", inject_to=HEAD_PREPEND, attrs=attrs)


__all__ = ["HEAD_PREPEND", "TagDescriptor", "link_tag"]
