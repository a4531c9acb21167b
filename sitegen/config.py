"""Configuration loading for sitegen (.sitegen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .snapshots import SourcePaths

CONFIG_FILENAME = ".sitegen.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class SiteConfig:
    """Input and output directories of the site."""

    pages_dir: Path
    static_dir: Path
    outdir: Path
    templates_dir: Optional[Path] = None


@dataclass
class ServeConfig:
    """Settings for the local preview server."""

    host: str = "127.0.0.1"
    port: int = 3000


@dataclass
class SitegenConfig:
    """Represents the settings defined in .sitegen.yml."""

    root: Path
    url_base: str = ""
    production: bool = False
    sources: SourcePaths = field(init=False)
    site: SiteConfig = field(init=False)
    serve: ServeConfig = field(default_factory=ServeConfig)

    def __post_init__(self) -> None:
        self.sources = SourcePaths(
            downloads=self.root / "src" / "downloads.json",
            downloads_gold=self.root / "src" / "downloads_gold.json",
            platforms=self.root / "src" / "platform.json",
        )
        self.site = SiteConfig(
            pages_dir=self.root / "src" / "pages",
            static_dir=self.root / "static",
            outdir=self.root / "build",
        )


def load_config(config_path: Path) -> SitegenConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()
    config = SitegenConfig(root=root)

    if not config_file.exists():
        return config

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    url_base = _as_str(data.get("url_base"))
    if url_base is not None:
        config.url_base = url_base.rstrip("/")
    production = _as_bool(data.get("production"))
    if production is not None:
        config.production = production

    sources_data = _as_dict(data.get("sources"))
    for key in ("downloads", "downloads_gold", "platforms"):
        value = _as_str(sources_data.get(key))
        if value:
            setattr(config.sources, key, root / value)

    site_data = _as_dict(data.get("site"))
    for key in ("pages_dir", "static_dir", "outdir", "templates_dir"):
        value = _as_str(site_data.get(key))
        if value:
            setattr(config.site, key, root / value)

    serve_data = _as_dict(data.get("serve"))
    host = _as_str(serve_data.get("host"))
    if host:
        config.serve.host = host
    port = _as_int(serve_data.get("port"))
    if port is not None:
        if not 0 < port < 65536:
            raise ConfigError(f"serve.port must be between 1 and 65535, got {port}")
        config.serve.port = port

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


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


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ServeConfig",
    "SiteConfig",
    "SitegenConfig",
    "load_config",
]
