"""Entry-name matching for hashed build output files."""

from __future__ import annotations


def matches_entry(file_name: str, entry_name: str) -> bool:
    """Return True when ``file_name`` was produced for the ``entry_name`` entry.

    Only the last path segment is compared. It must start with the entry name
    followed by ``-`` (content hash) or ``.`` (extension), so ``main`` matches
    ``assets/main-ab12cd.js`` and ``main.css`` but not ``mainframe-ab12cd.js``.
    """
    base = file_name.rsplit("/", 1)[-1]
    return base.startswith(f"{entry_name}-") or base.startswith(f"{entry_name}.")


__all__ = ["matches_entry"]
