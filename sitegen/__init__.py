"""Static site generator that assembles a versioned download catalog."""

from .global_meta import INDETERMINATE_VERSION, build_global_meta, load_global_meta
from .models import (
    DownloadEntry,
    FileNode,
    GlobalMeta,
    PlatformCatalogEntry,
    VersionBucket,
    VersionDownloads,
)
from .snapshots import CatalogError, SourceParseError, SourceReadError

__all__ = [
    "CatalogError",
    "DownloadEntry",
    "FileNode",
    "GlobalMeta",
    "INDETERMINATE_VERSION",
    "PlatformCatalogEntry",
    "SourceParseError",
    "SourceReadError",
    "VersionBucket",
    "VersionDownloads",
    "build_global_meta",
    "load_global_meta",
]
