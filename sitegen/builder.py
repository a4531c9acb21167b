"""Pipeline orchestration for site builds."""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .config import SitegenConfig, load_config
from .global_meta import load_global_meta
from .logging import get_logger
from .models import GlobalMeta
from .render import PageRenderer

META_FILENAME = "meta.json"
STATIC_DIRNAME = "static"


@dataclass
class BuildOutcome:
    """Result of a site build."""

    outdir: Path
    meta: GlobalMeta
    pages: List[Path] = field(default_factory=list)


class SiteBuilder:
    """Coordinates catalog assembly, static copying and page rendering."""

    def __init__(self, renderer: PageRenderer | None = None) -> None:
        self._renderer = renderer
        self.logger = get_logger("builder")

    def load_meta(
        self,
        path: str,
        *,
        production: bool | None = None,
        url_base: str | None = None,
    ) -> GlobalMeta:
        """Build the download catalog for the site at ``path`` without writing anything."""
        config = self.load_config(path)
        return load_global_meta(config, production=production, url_base=url_base)

    def run_build(
        self,
        path: str,
        *,
        production: bool | None = None,
        url_base: str | None = None,
        outdir: str | None = None,
    ) -> BuildOutcome:
        """Assemble the catalog and write the site into the output directory."""
        config = self.load_config(path)
        self.logger.info("Starting build for %s", config.root)

        # Nothing is written until the catalog has been fully assembled.
        meta = load_global_meta(config, production=production, url_base=url_base)

        target = Path(outdir).expanduser().resolve() if outdir else config.site.outdir
        target.mkdir(parents=True, exist_ok=True)

        self._copy_static(config, target)

        renderer = self._renderer or PageRenderer(config.site.templates_dir)
        pages = renderer.render_pages(config.site.pages_dir, target, meta)

        meta_path = target / META_FILENAME
        meta_path.write_text(meta.model_dump_json(indent=2, exclude_none=True), encoding="utf-8")
        self.logger.debug("Wrote %s", meta_path)

        return BuildOutcome(outdir=target, meta=meta, pages=pages)

    @staticmethod
    def load_config(path: str) -> SitegenConfig:
        return load_config(Path(path).expanduser().resolve())

    def _copy_static(self, config: SitegenConfig, target: Path) -> None:
        static_dir = config.site.static_dir
        if not static_dir.is_dir():
            self.logger.debug("No static directory at %s", static_dir)
            return
        self.logger.info("Copying static files from %s", static_dir)
        shutil.copytree(static_dir, target / STATIC_DIRNAME, dirs_exist_ok=True)
        favicon = static_dir / "img" / "favicon.ico"
        if favicon.is_file():
            shutil.copy2(favicon, target / "favicon.ico")


__all__ = ["BuildOutcome", "META_FILENAME", "STATIC_DIRNAME", "SiteBuilder"]
