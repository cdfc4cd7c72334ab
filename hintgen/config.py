"""Preload options and configuration loading (.hintgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import yaml

CONFIG_FILENAME = ".hintgen.yml"


class ConfigError(RuntimeError):
    """Raised when preload options cannot be interpreted."""


@dataclass(frozen=True)
class StaticEntries:
    """The same entry names for every page."""

    entries: Tuple[str, ...] = ()

    def entries_for(self, page_id: str) -> Tuple[str, ...]:
        return self.entries


@dataclass(frozen=True)
class PerPageEntries:
    """Entry names looked up by page identifier; unknown pages get none."""

    pages: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)

    def entries_for(self, page_id: str) -> Tuple[str, ...]:
        return self.pages.get(page_id, ())


@dataclass(frozen=True)
class ComputedEntries:
    """Entry names computed from the page identifier on demand."""

    func: Callable[[str], Sequence[str]]

    def entries_for(self, page_id: str) -> Tuple[str, ...]:
        result = self.func(page_id)
        if result is not None and not isinstance(result, (str, Sequence)):
            result = list(result)
        return tuple(_as_str_list(result))


CriticalSpec = Union[StaticEntries, PerPageEntries, ComputedEntries]


def coerce_critical_spec(value: Any, *, option: str = "critical spec") -> CriticalSpec:
    """Turn a list, per-page mapping or callable into a :data:`CriticalSpec`."""
    if isinstance(value, (StaticEntries, PerPageEntries, ComputedEntries)):
        return value
    if value is None:
        return StaticEntries()
    if isinstance(value, str):
        return StaticEntries((value,))
    if isinstance(value, Mapping):
        pages: Dict[str, Tuple[str, ...]] = {}
        for page_id, entries in value.items():
            pages[str(page_id)] = tuple(_as_str_list(entries))
        return PerPageEntries(pages)
    if isinstance(value, (list, tuple)):
        return StaticEntries(tuple(_as_str_list(value)))
    if callable(value):
        return ComputedEntries(value)
    raise ConfigError(
        f"{option} must be a list of entry names, a page mapping or a callable, "
        f"got {type(value).__name__}"
    )


@dataclass
class FontPreload:
    """A font (or font stylesheet) to preload."""

    href: str
    type: Optional[str] = None
    as_: str = "font"
    crossorigin: bool = False


@dataclass
class PreloadOptions:
    """Settings that drive which hints are generated for a page."""

    images_to_preload: List[str] = field(default_factory=list)
    fonts_to_preload: List[FontPreload] = field(default_factory=list)
    critical_js: Any = None
    critical_css: Any = None
    preload_google_fonts: bool = False
    base: str = "/"

    def __post_init__(self) -> None:
        self.critical_js = coerce_critical_spec(self.critical_js, option="critical_js")
        self.critical_css = coerce_critical_spec(self.critical_css, option="critical_css")
        if not self.base.endswith("/"):
            self.base += "/"


def load_config(config_path: Path) -> PreloadOptions:
    """Load preload options from disk, returning defaults when no file exists."""
    config_file = _resolve_config_path(config_path)

    if not config_file.exists():
        return PreloadOptions()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    fonts: List[FontPreload] = []
    for item in _as_list(_lookup(data, "fonts_to_preload", "fontsToPreload")):
        font = _as_font(item)
        if font is None:
            raise ConfigError(f"Font entries need an 'href', got: {item!r}")
        fonts.append(font)

    return PreloadOptions(
        images_to_preload=_as_str_list(_lookup(data, "images_to_preload", "imagesToPreload")),
        fonts_to_preload=fonts,
        critical_js=_lookup(data, "critical_js", "criticalJs"),
        critical_css=_lookup(data, "critical_css", "criticalCss"),
        preload_google_fonts=_as_bool(
            _lookup(data, "preload_google_fonts", "preloadGoogleFonts")
        )
        or False,
        base=_as_str(data.get("base")) or "/",
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _lookup(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _as_font(value: Any) -> Optional[FontPreload]:
    if isinstance(value, str):
        return FontPreload(href=value)
    if not isinstance(value, dict):
        return None
    href = _as_str(value.get("href"))
    if not href:
        return None
    return FontPreload(
        href=href,
        type=_as_str(value.get("type")),
        as_=_as_str(_lookup(value, "as", "as_")) or "font",
        crossorigin=_as_bool(value.get("crossorigin")) or False,
    )


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
