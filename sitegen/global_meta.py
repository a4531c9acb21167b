"""Assembly of the site-wide download catalog."""

from __future__ import annotations

from typing import Sequence

from .config import SitegenConfig
from .downloads import boil_version_downloads, resolve_download_urls
from .logging import get_logger
from .models import FileNode, GlobalMeta, PlatformCatalogEntry
from .snapshots import load_sources
from .versions import build_pivot, extract_versions, merge_versions

INDETERMINATE_VERSION = "indeterminate"

_LOGGER = get_logger("global_meta")


def build_global_meta(
    standard: FileNode,
    gold: FileNode,
    platforms: Sequence[PlatformCatalogEntry],
    *,
    url_base: str,
    production: bool,
) -> GlobalMeta:
    """Reconcile artifact snapshots with the platform catalog.

    The catalog entries in ``platforms`` are updated in place with their
    resolved download URLs and become part of the returned value.
    """
    buckets = merge_versions(extract_versions(standard), extract_versions(gold))
    pivot = build_pivot(buckets)

    resolved = resolve_download_urls(platforms, pivot, url_base)
    version_downloads = boil_version_downloads(buckets, platforms)

    app_version = buckets[0].version if buckets else INDETERMINATE_VERSION
    _LOGGER.info(
        "Download catalog ready: app version %s, %d versions, %d resolved downloads, %d history rows",
        app_version,
        len(buckets),
        resolved,
        len(version_downloads),
    )
    return GlobalMeta(
        app_version=app_version,
        platforms=tuple(platforms),
        version_downloads=tuple(version_downloads),
        prod=production,
    )


def load_global_meta(
    config: SitegenConfig,
    *,
    production: bool | None = None,
    url_base: str | None = None,
) -> GlobalMeta:
    """Load the configured source documents and build the catalog from them."""
    sources = load_sources(config.sources)
    return build_global_meta(
        sources.standard,
        sources.gold,
        sources.platforms,
        url_base=config.url_base if url_base is None else url_base.rstrip("/"),
        production=config.production if production is None else production,
    )


__all__ = ["INDETERMINATE_VERSION", "build_global_meta", "load_global_meta"]
