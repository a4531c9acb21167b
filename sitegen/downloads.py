"""Download URL resolution and the per-version download history."""

from __future__ import annotations

from typing import Dict, List, Mapping, Sequence, Set

from .logging import get_logger
from .models import DownloadEntry, PlatformCatalogEntry, VersionBucket, VersionDownloads

_LOGGER = get_logger("downloads")


def download_path(url_base: str, version: str, filename: str) -> str:
    return f"{url_base}/files/{version.replace('.', '_')}/{filename}"


def gold_download_path(url_base: str, version: str, filename: str) -> str:
    return f"{url_base}/api/goldfiles/{version.replace('.', '_')}/{filename}"


def resolve_download_urls(
    platforms: Sequence[PlatformCatalogEntry],
    pivot: Mapping[str, Sequence[str]],
    url_base: str,
) -> int:
    """Point every catalog entry at the newest build of its file.

    Entries are updated in place. Entries without a filename, or whose file
    was never published, keep ``download_url`` unset. Returns the number of
    entries that received a URL.
    """
    resolved = 0
    for platform in platforms:
        for download in platform.downloads:
            if not download.filename:
                continue
            versions = pivot.get(download.filename)
            if not versions:
                _LOGGER.warning(
                    "No published build of %s for %s / %s",
                    download.filename,
                    platform.title,
                    download.name,
                )
                continue
            latest = versions[0]
            if download.gold:
                download.download_url = gold_download_path(url_base, latest, download.filename)
            else:
                download.download_url = download_path(url_base, latest, download.filename)
            resolved += 1
    return resolved


def boil_version_downloads(
    buckets: Sequence[VersionBucket],
    platforms: Sequence[PlatformCatalogEntry],
) -> List[VersionDownloads]:
    """Flatten buckets and catalog into the previous-releases table.

    Within each (version, platform) pair only the first matching download
    carries the platform badge as its icon.
    """
    lookups = [_index_by_filename(platform) for platform in platforms]

    rows: List[VersionDownloads] = []
    for bucket in buckets:
        collected: List[DownloadEntry] = []
        for platform, lookup in zip(platforms, lookups):
            first = True
            for filename in bucket.files:
                match = lookup.get(filename)
                if match is None:
                    continue
                clone = match.model_copy(deep=True)
                if first:
                    clone.icon = platform.platform_badge
                    first = False
                else:
                    clone.icon = None
                collected.append(clone)
        if collected:
            rows.append(VersionDownloads(version=bucket.version, downloads=tuple(collected)))
        else:
            _LOGGER.debug("Version %s has no catalogued downloads", bucket.version)
    return rows


def _index_by_filename(platform: PlatformCatalogEntry) -> Dict[str, DownloadEntry]:
    # First declaration wins when a platform lists the same filename twice.
    index: Dict[str, DownloadEntry] = {}
    duplicates: Set[str] = set()
    for download in platform.downloads:
        if download.filename is None:
            continue
        if download.filename in index:
            if download.filename not in duplicates:
                duplicates.add(download.filename)
                _LOGGER.debug(
                    "Platform %s lists %s more than once; keeping %s",
                    platform.title,
                    download.filename,
                    index[download.filename].name,
                )
            continue
        index[download.filename] = download
    return index


__all__ = [
    "boil_version_downloads",
    "download_path",
    "gold_download_path",
    "resolve_download_urls",
]
