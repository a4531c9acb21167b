"""Loading of artifact-tree snapshots and the platform catalog."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List

from pydantic import TypeAdapter, ValidationError

from .logging import get_logger
from .models import FileNode, PlatformCatalogEntry

_LOGGER = get_logger("snapshots")

_CATALOG_ADAPTER = TypeAdapter(List[PlatformCatalogEntry])


class CatalogError(RuntimeError):
    """Base class for failures while assembling the download catalog."""


class SourceReadError(CatalogError):
    """Raised when a source document is missing or cannot be read."""


class SourceParseError(CatalogError):
    """Raised when a source document does not match the expected schema."""


@dataclass
class SourcePaths:
    """Locations of the three documents the catalog is assembled from."""

    downloads: Path
    downloads_gold: Path
    platforms: Path


@dataclass
class SourceDocuments:
    """Deserialized source documents, loaded up front before any processing."""

    standard: FileNode
    gold: FileNode
    platforms: List[PlatformCatalogEntry]


def load_file_tree(path: Path) -> FileNode:
    """Load a `{name, is_dir, children}` directory snapshot."""
    data = _read_json(path)
    try:
        return FileNode.model_validate(data)
    except ValidationError as exc:
        raise SourceParseError(f"{path} is not a valid directory snapshot: {exc}") from exc


def load_platform_catalog(path: Path) -> List[PlatformCatalogEntry]:
    """Load the ordered list of platforms and their downloads."""
    data = _read_json(path)
    try:
        return _CATALOG_ADAPTER.validate_python(data)
    except ValidationError as exc:
        raise SourceParseError(f"{path} is not a valid platform catalog: {exc}") from exc


def load_sources(paths: SourcePaths) -> SourceDocuments:
    """Read all three documents; any failure aborts before processing starts."""
    standard = load_file_tree(paths.downloads)
    gold = load_file_tree(paths.downloads_gold)
    platforms = load_platform_catalog(paths.platforms)
    return SourceDocuments(standard=standard, gold=gold, platforms=platforms)


def _read_json(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SourceReadError(f"Source document not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(f"Failed to read {path}: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SourceParseError(f"Failed to parse {path.name}: {exc}") from exc
    _LOGGER.debug("Loaded source document %s", path)
    return data


__all__ = [
    "CatalogError",
    "SourceDocuments",
    "SourceParseError",
    "SourcePaths",
    "SourceReadError",
    "load_file_tree",
    "load_platform_catalog",
    "load_sources",
]
