"""Resource hint injection for generated HTML pages."""

from .config import (
    ComputedEntries,
    ConfigError,
    FontPreload,
    PerPageEntries,
    PreloadOptions,
    StaticEntries,
    load_config,
)
from .critical import resolve_critical_assets
from .images import ImagePreloadScanner, dark_variant
from .matching import matches_entry
from .models import TagDescriptor
from .paths import canonicalize_page_path
from .pipeline import PageTransform, PreloadPipeline, transform_page
from .tags import TagBuilder

__all__ = [
    "ComputedEntries",
    "ConfigError",
    "FontPreload",
    "ImagePreloadScanner",
    "PageTransform",
    "PerPageEntries",
    "PreloadOptions",
    "PreloadPipeline",
    "StaticEntries",
    "TagBuilder",
    "TagDescriptor",
    "canonicalize_page_path",
    "dark_variant",
    "load_config",
    "matches_entry",
    "resolve_critical_assets",
    "transform_page",
]
