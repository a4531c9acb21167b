"""Core data models shared across sitegen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class FileNode(BaseModel):
    """One level of a serialized directory listing."""

    model_config = ConfigDict(extra="ignore")

    name: str
    is_dir: bool
    children: List["FileNode"] = Field(default_factory=list)


@dataclass
class VersionBucket:
    """Artifact filenames published under a single version directory."""

    version: str
    files: List[str] = field(default_factory=list)


class DownloadEntry(BaseModel):
    """A single downloadable item listed under a platform."""

    model_config = ConfigDict(extra="ignore")

    name: str
    icon: Optional[str] = None
    url: Optional[str] = None
    download_url: Optional[str] = None
    service_img: Optional[str] = None
    service_alt: Optional[str] = None
    short_name: Optional[str] = None
    whats_this: Optional[str] = None
    whats_this_url: Optional[str] = None
    filename: Optional[str] = None
    gold: bool = False


class PlatformCatalogEntry(BaseModel):
    """Hand-maintained description of a supported platform and its downloads."""

    model_config = ConfigDict(extra="ignore")

    title: str
    platform_badge: Optional[str] = None
    platform_key: str
    downloads: List[DownloadEntry] = Field(default_factory=list)


class VersionDownloads(BaseModel):
    """One row of the previous-releases table."""

    model_config = ConfigDict(frozen=True)

    version: str
    downloads: Tuple[DownloadEntry, ...]


class GlobalMeta(BaseModel):
    """Site-wide data handed to every page and template.

    Built once per run and shared by reference afterwards; the model is frozen
    and its sequences are tuples so consumers cannot reorder or extend them.
    """

    model_config = ConfigDict(frozen=True)

    app_version: str
    platforms: Tuple[PlatformCatalogEntry, ...] = ()
    version_downloads: Tuple[VersionDownloads, ...] = ()
    prod: bool = False

    def to_template_context(self) -> Dict[str, Any]:
        """Return a plain mapping suitable for template engines."""
        return self.model_dump(mode="json")


__all__ = [
    "DownloadEntry",
    "FileNode",
    "GlobalMeta",
    "PlatformCatalogEntry",
    "VersionBucket",
    "VersionDownloads",
]
