"""Tests for sitegen.downloads."""

from __future__ import annotations

from typing import List

from sitegen.downloads import (
    boil_version_downloads,
    download_path,
    gold_download_path,
    resolve_download_urls,
)
from sitegen.models import PlatformCatalogEntry, VersionBucket


def _catalog(raw: list[dict]) -> List[PlatformCatalogEntry]:
    return [PlatformCatalogEntry.model_validate(entry) for entry in raw]


def test_download_paths_replace_dots_in_version() -> None:
    assert download_path("https://x.org", "1.10.0", "a.apk") == "https://x.org/files/1_10_0/a.apk"
    assert (
        gold_download_path("https://x.org", "1.10.0", "a.apk")
        == "https://x.org/api/goldfiles/1_10_0/a.apk"
    )


def test_resolve_download_urls_uses_newest_version(platforms) -> None:
    catalog = _catalog(platforms)
    pivot = {
        "a.apk": ["1.10.0", "1.9.0"],
        "a_gold.apk": ["1.9.0"],
        "b.exe": ["1.9.0"],
    }

    resolved = resolve_download_urls(catalog, pivot, "https://x.org")

    android, windows = catalog
    assert resolved == 3
    assert android.downloads[0].download_url == "https://x.org/files/1_10_0/a.apk"
    assert android.downloads[1].download_url == "https://x.org/api/goldfiles/1_9_0/a_gold.apk"
    assert android.downloads[2].download_url is None
    assert windows.downloads[0].download_url == "https://x.org/files/1_9_0/b.exe"
    assert windows.downloads[1].download_url is None


def test_resolve_download_urls_logs_unpublished_files(platforms, caplog) -> None:
    catalog = _catalog(platforms)

    with caplog.at_level("WARNING", logger="sitegen.downloads"):
        resolve_download_urls(catalog, {}, "")

    assert "b.zip" in caplog.text
    assert all(download.download_url is None for p in catalog for download in p.downloads)


def test_boil_assigns_badge_to_first_match_per_platform(platforms) -> None:
    catalog = _catalog(platforms)
    buckets = [VersionBucket("1.9.0", ["b.zip", "a.apk", "b.exe", "a_gold.apk"])]

    rows = boil_version_downloads(buckets, catalog)

    assert len(rows) == 1
    row = rows[0]
    assert row.version == "1.9.0"
    # Platforms in catalog order, files in bucket order within each platform.
    assert [(d.filename, d.icon) for d in row.downloads] == [
        ("a.apk", "/img/android.svg"),
        ("a_gold.apk", None),
        ("b.zip", "/img/windows.svg"),
        ("b.exe", None),
    ]


def test_boil_skips_versions_without_catalogued_files(platforms) -> None:
    catalog = _catalog(platforms)
    buckets = [VersionBucket("2.0.0", ["unknown.bin"]), VersionBucket("1.0.0", ["b.exe"])]

    rows = boil_version_downloads(buckets, catalog)

    assert [row.version for row in rows] == ["1.0.0"]
    assert all(row.downloads for row in rows)


def test_boil_clones_entries_instead_of_mutating_catalog(platforms) -> None:
    platforms[0]["downloads"][0]["icon"] = "/img/custom.svg"
    catalog = _catalog(platforms)
    buckets = [VersionBucket("1.0.0", ["a_gold.apk", "a.apk"])]

    rows = boil_version_downloads(buckets, catalog)

    assert [d.icon for d in rows[0].downloads] == ["/img/android.svg", None]
    assert catalog[0].downloads[0].icon == "/img/custom.svg"
    assert catalog[0].downloads[1].icon is None
    assert rows[0].downloads[0] is not catalog[0].downloads[1]


def test_boil_first_duplicate_filename_wins() -> None:
    catalog = _catalog(
        [
            {
                "title": "Linux",
                "platform_badge": "/img/linux.svg",
                "platform_key": "linux",
                "downloads": [
                    {"name": "AppImage", "filename": "app.AppImage"},
                    {"name": "AppImage (mirror)", "filename": "app.AppImage"},
                ],
            }
        ]
    )

    rows = boil_version_downloads([VersionBucket("1.0.0", ["app.AppImage"])], catalog)

    assert [d.name for d in rows[0].downloads] == ["AppImage"]


def test_boil_badge_is_none_when_platform_has_no_badge() -> None:
    catalog = _catalog(
        [
            {
                "title": "Other",
                "platform_key": "other",
                "downloads": [{"name": "Tarball", "filename": "src.tar.gz"}],
            }
        ]
    )

    rows = boil_version_downloads([VersionBucket("1.0.0", ["src.tar.gz"])], catalog)

    assert rows[0].downloads[0].icon is None
