"""Tests for page and site level orchestration."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from hintgen.config import PreloadOptions
from hintgen.pipeline import PreloadPipeline, collect_output_files, transform_page
from tests._fixtures.site_builder import SiteBuilder

OUTPUT_FILES = ["assets/main-abc.js", "assets/vendor-def.js", "assets/main-abc.css"]


def test_transform_page_returns_html_unchanged(tmp_path: Path) -> None:
    html = '<html><head></head><body><img src="/a.png" data-preload></body></html>'
    result = transform_page(
        html,
        page_path=tmp_path / "index.html",
        site_root=tmp_path,
        output_files=OUTPUT_FILES,
        options=PreloadOptions(critical_js=["main"], critical_css=["main"]),
    )

    assert result.html == html
    assert [tag.attrs["href"] for tag in result.tags] == [
        "/a.png",
        "/assets/main-abc.css",
        "/assets/main-abc.js",
    ]


def test_transform_page_uses_page_identifier_for_lookups(tmp_path: Path) -> None:
    options = PreloadOptions(critical_js={"/blog/index.html": ["vendor"]})

    blog = transform_page(
        "",
        page_path=tmp_path / "blog" / "index.html",
        site_root=tmp_path,
        output_files=OUTPUT_FILES,
        options=options,
    )
    home = transform_page(
        "",
        page_path=tmp_path / "index.html",
        site_root=tmp_path,
        output_files=OUTPUT_FILES,
        options=options,
    )

    assert [tag.attrs["href"] for tag in blog.tags] == ["/assets/vendor-def.js"]
    assert home.tags == ()


def test_transform_page_is_safe_to_run_concurrently(tmp_path: Path) -> None:
    options = PreloadOptions(critical_js=lambda page_id: ["main"] if page_id == "/0.html" else [])

    def run(index: int):
        return transform_page(
            f'<img src="/{index}.png" data-preload>',
            page_path=tmp_path / f"{index}.html",
            site_root=tmp_path,
            output_files=OUTPUT_FILES,
            options=options,
        )

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(run, range(8)))

    assert [tag.attrs["href"] for tag in results[0].tags] == ["/0.png", "/assets/main-abc.js"]
    for index, result in enumerate(results[1:], start=1):
        assert [tag.attrs["href"] for tag in result.tags] == [f"/{index}.png"]


def test_collect_output_files_is_sorted_and_relative(site_builder: SiteBuilder) -> None:
    site_builder.write(
        {
            "index.html": "<html></html>",
            "assets/main-abc.js": "",
            "assets/css/main-abc.css": "",
        }
    )
    assert collect_output_files(site_builder.path()) == [
        "assets/css/main-abc.css",
        "assets/main-abc.js",
        "index.html",
    ]


def test_pipeline_injects_tags_into_every_page(site_builder: SiteBuilder) -> None:
    site_builder.write(
        {
            "index.html": """
                <html>
                <head><title>Home</title></head>
                <body><img class="has-dark" src="/logo.png" data-preload></body>
                </html>
            """,
            "blog/index.html": "<html><head></head><body></body></html>",
            "assets/main-abc.js": "",
            "assets/blog-123.js": "",
        }
    )
    options = PreloadOptions(
        critical_js={"/index.html": ["main"], "/blog/index.html": ["main", "blog"]}
    )

    outcomes = PreloadPipeline(options).run(site_builder.path())

    assert [outcome.page_id for outcome in outcomes] == ["/blog/index.html", "/index.html"]
    assert all(outcome.changed for outcome in outcomes)

    home = site_builder.read("index.html")
    assert '<link rel="preload" href="/logo.png" as="image">' in home
    assert '<link rel="preload" href="/logo-dark.png" as="image">' in home
    assert '<link rel="preload" href="/assets/main-abc.js" as="script" crossorigin>' in home
    assert home.index("<!-- hintgen:begin -->") < home.index("<title>")

    blog = site_builder.read("blog/index.html")
    assert blog.index('href="/assets/main-abc.js"') < blog.index('href="/assets/blog-123.js"')


def test_pipeline_rerun_leaves_pages_unchanged(site_builder: SiteBuilder) -> None:
    site_builder.write(
        {"index.html": "<html><head></head></html>", "assets/main-abc.css": ""}
    )
    pipeline = PreloadPipeline(PreloadOptions(critical_css=["main"]))

    pipeline.run(site_builder.path())
    first = site_builder.read("index.html")
    outcomes = pipeline.run(site_builder.path())

    assert site_builder.read("index.html") == first
    assert [outcome.changed for outcome in outcomes] == [False]


def test_pipeline_dry_run_does_not_write(site_builder: SiteBuilder) -> None:
    site_builder.write({"index.html": "<html><head></head></html>"})
    options = PreloadOptions(images_to_preload=["/hero.webp"])

    outcomes = PreloadPipeline(options).run(site_builder.path(), dry_run=True)

    assert outcomes[0].changed is True
    assert site_builder.read("index.html") == "<html><head></head></html>"


def test_pipeline_requires_existing_directory(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        PreloadPipeline().run(tmp_path / "missing")


def test_pipeline_escapes_entity_encoded_urls_once(site_builder: SiteBuilder) -> None:
    site_builder.write(
        {
            "index.html": (
                '<html><head></head><body>'
                '<img src="/a.png?w=1&amp;h=2" data-preload></body></html>'
            )
        }
    )

    PreloadPipeline().run(site_builder.path())

    page = site_builder.read("index.html")
    assert '<link rel="preload" href="/a.png?w=1&amp;h=2" as="image">' in page
    assert "&amp;amp;" not in page


def test_transform_page_without_output_table_skips_critical_assets(tmp_path: Path) -> None:
    result = transform_page(
        '<img src="/a.png" data-preload>',
        page_path=tmp_path / "index.html",
        site_root=tmp_path,
        output_files=None,
        options=PreloadOptions(critical_js=["main"], critical_css=["main"]),
    )
    assert [tag.attrs["href"] for tag in result.tags] == ["/a.png"]
