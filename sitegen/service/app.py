"""FastAPI application serving the built site and its download catalog."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Tuple

from fastapi import Depends, FastAPI
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from ..logging import get_logger
from ..models import GlobalMeta, PlatformCatalogEntry, VersionDownloads

_LOGGER = get_logger("service")


class HealthResponse(BaseModel):
    status: str
    app_version: str


class LatestDownloadsResponse(BaseModel):
    app_version: str
    platforms: Tuple[PlatformCatalogEntry, ...]


class HistoryResponse(BaseModel):
    version_downloads: Tuple[VersionDownloads, ...]


def create_app(
    meta_factory: Callable[[], GlobalMeta],
    site_dir: Path | None = None,
) -> FastAPI:
    """Create the application; the catalog is built once and shared by every request."""

    meta = meta_factory()
    app = FastAPI(title="sitegen", version=meta.app_version)
    app.state.meta = meta

    async def get_meta() -> GlobalMeta:
        return app.state.meta

    @app.get("/health", response_model=HealthResponse)
    async def health(current: GlobalMeta = Depends(get_meta)) -> HealthResponse:
        return HealthResponse(status="ok", app_version=current.app_version)

    @app.get("/api/meta", response_model=GlobalMeta, response_model_exclude_none=True)
    async def global_meta(current: GlobalMeta = Depends(get_meta)) -> GlobalMeta:
        return current

    @app.get(
        "/api/downloads/latest",
        response_model=LatestDownloadsResponse,
        response_model_exclude_none=True,
    )
    async def latest_downloads(
        current: GlobalMeta = Depends(get_meta),
    ) -> LatestDownloadsResponse:
        return LatestDownloadsResponse(
            app_version=current.app_version, platforms=current.platforms
        )

    @app.get(
        "/api/downloads/history",
        response_model=HistoryResponse,
        response_model_exclude_none=True,
    )
    async def download_history(current: GlobalMeta = Depends(get_meta)) -> HistoryResponse:
        return HistoryResponse(version_downloads=current.version_downloads)

    if site_dir is not None and site_dir.is_dir():
        # Mounted last so the API routes take precedence over the catch-all.
        app.mount("/", StaticFiles(directory=str(site_dir), html=True), name="site")
    elif site_dir is not None:
        _LOGGER.warning("Site directory %s does not exist; serving API only", site_dir)

    return app


def run_service(
    meta_factory: Callable[[], GlobalMeta],
    site_dir: Path | None = None,
    host: str = "127.0.0.1",
    port: int = 3000,
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app(meta_factory, site_dir)
    _LOGGER.info("Serving on http://%s:%d", host, port)
    uvicorn.run(app, host=host, port=port)
