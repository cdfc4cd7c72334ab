"""Resolution of critical entry names to concrete build output files."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping

from .config import CriticalSpec, coerce_critical_spec
from .matching import matches_entry


def output_file_names(
    output_files: Iterable[str] | Mapping[str, Any] | None,
) -> List[str]:
    """Return output file names in table order.

    Mappings (``name -> metadata``) contribute their keys; a missing table is
    treated as empty.
    """
    if output_files is None:
        return []
    if isinstance(output_files, str):
        raise TypeError("Output file table must be a collection of names, not a string")
    return [str(name) for name in output_files]


def resolve_critical_assets(
    spec: CriticalSpec | Any,
    page_id: str,
    output_files: Iterable[str] | Mapping[str, Any] | None,
    extension: str,
) -> List[str]:
    """Return output files matching the page's critical entries.

    Entries are visited in declared order and, for each one, the whole table is
    scanned in its own order. Files matched by more than one entry are listed
    once per entry.
    """
    entries = coerce_critical_spec(spec).entries_for(page_id)
    names = output_file_names(output_files)

    resolved: List[str] = []
    for entry_name in entries:
        for file_name in names:
            if file_name.endswith(extension) and matches_entry(file_name, entry_name):
                resolved.append(file_name)
    return resolved


__all__ = ["output_file_names", "resolve_critical_assets"]
