"""Assembly of the ordered preload/preconnect tag list for a page."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping

from .config import FontPreload, PreloadOptions
from .critical import output_file_names, resolve_critical_assets
from .images import ImagePreloadScanner
from .logging import get_logger
from .models import TagDescriptor, link_tag

DEFAULT_FONT_TYPE = "font/woff2"
GOOGLE_FONTS_ORIGINS = ("https://fonts.googleapis.com", "https://fonts.gstatic.com")


class TagBuilder:
    """Merges every hint source into one list, highest priority first.

    The order is fixed: scanned images, configured images, Google Fonts
    preconnects, configured fonts, critical CSS, critical JS.
    """

    def __init__(self, scanner: ImagePreloadScanner | None = None) -> None:
        self.scanner = scanner or ImagePreloadScanner()
        self.logger = get_logger("tags")

    def build(
        self,
        html: str,
        page_id: str,
        output_files: Iterable[str] | Mapping[str, Any] | None,
        options: PreloadOptions,
    ) -> List[TagDescriptor]:
        if not isinstance(html, str):
            raise TypeError(f"HTML must be text, got {type(html).__name__}")

        names = output_file_names(output_files)
        tags: List[TagDescriptor] = []

        tags.extend(self.scanner.scan(html))

        for image_url in options.images_to_preload:
            tags.append(link_tag({"rel": "preload", "href": image_url, "as": "image"}))

        if options.preload_google_fonts:
            for origin in GOOGLE_FONTS_ORIGINS:
                tags.append(link_tag({"rel": "preconnect", "href": origin, "crossorigin": ""}))

        for font in options.fonts_to_preload:
            tags.append(self._font_tag(font))

        css_files = resolve_critical_assets(options.critical_css, page_id, names, ".css")
        js_files = resolve_critical_assets(options.critical_js, page_id, names, ".js")
        self.logger.debug(
            "Page %s: %d critical CSS, %d critical JS file(s)",
            page_id,
            len(css_files),
            len(js_files),
        )
        for file_name in css_files:
            tags.append(self._asset_tag(options.base, file_name, "style"))
        for file_name in js_files:
            tags.append(self._asset_tag(options.base, file_name, "script"))

        return tags

    @staticmethod
    def _font_tag(font: FontPreload) -> TagDescriptor:
        as_ = font.as_ or "font"
        attrs = {"rel": "preload", "href": font.href, "as": as_}
        if as_ == "font":
            attrs["type"] = font.type or DEFAULT_FONT_TYPE
        if font.crossorigin:
            attrs["crossorigin"] = ""
        return link_tag(attrs)

    @staticmethod
    def _asset_tag(base: str, file_name: str, as_: str) -> TagDescriptor:
        return link_tag(
            {"rel": "preload", "href": base + file_name, "as": as_, "crossorigin": ""}
        )


__all__ = ["DEFAULT_FONT_TYPE", "GOOGLE_FONTS_ORIGINS", "TagBuilder"]
