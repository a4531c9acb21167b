"""Template page rendering with the download catalog as globals."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from .logging import get_logger
from .models import GlobalMeta

_TEMPLATE_SUFFIXES = (".html.j2", ".j2")
_DEFAULT_PAGE = "downloads.html.j2"
_INDEX_PAGE = "index"


class RenderError(RuntimeError):
    """Raised when a page template fails to render."""


class PageRenderer:
    """Renders page templates into a folder-per-page output tree."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self.logger = get_logger("render")

    def render_page(self, page: Path, meta: GlobalMeta) -> str:
        """Render a single page template with ``globals`` bound to ``meta``."""
        env = self._create_env(page.parent)
        return self._render(env, page.name, meta)

    def render_pages(self, pages_dir: Path, outdir: Path, meta: GlobalMeta) -> List[Path]:
        """Render every template in ``pages_dir`` and return the written files."""
        if not pages_dir.is_dir():
            self.logger.info("No pages directory at %s; rendering default downloads page", pages_dir)
            env = self._create_env(None)
            html = self._render(env, _DEFAULT_PAGE, meta)
            return [write_page(outdir, "downloads", html)]

        env = self._create_env(pages_dir)
        written: List[Path] = []
        for page in sorted(pages_dir.iterdir()):
            if not page.is_file():
                continue
            stem = _page_stem(page.name)
            if stem is None:
                self.logger.debug("Ignoring %s", page)
                continue
            html = self._render(env, page.name, meta)
            target = write_page(outdir, stem, html)
            self.logger.info("Writing page %s", target)
            written.append(target)
        return written

    # ------------------------------------------------------------------
    # Internal helpers

    def _render(self, env: Environment, template_name: str, meta: GlobalMeta) -> str:
        context: Dict[str, object] = {"globals": meta.to_template_context()}
        try:
            template = env.get_template(template_name)
            return template.render(**context)
        except TemplateError as exc:
            raise RenderError(f"Failed to render {template_name}: {exc}") from exc

    def _create_env(self, pages_dir: Optional[Path]) -> Environment:
        # User templates shadow page-local includes, which shadow the bundled pages.
        candidates = (self.templates_dir, pages_dir, Path(__file__).with_name("templates"))
        search_path = list(dict.fromkeys(str(path) for path in candidates if path))
        loader = FileSystemLoader(search_path)
        return Environment(
            loader=loader,
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )


def write_page(outdir: Path, stem: str, html: str) -> Path:
    """Write ``stem`` as ``outdir/stem/index.html``, or ``outdir/index.html`` for the index."""
    if stem == _INDEX_PAGE:
        target = outdir / "index.html"
    else:
        target = outdir / stem / "index.html"
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(html, encoding="utf-8")
    return target


def _page_stem(filename: str) -> Optional[str]:
    for suffix in _TEMPLATE_SUFFIXES:
        if filename.endswith(suffix) and len(filename) > len(suffix):
            return filename[: -len(suffix)]
    return None


__all__ = ["PageRenderer", "RenderError", "write_page"]
