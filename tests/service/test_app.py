"""Tests for the FastAPI service mode."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from sitegen.models import DownloadEntry, GlobalMeta, PlatformCatalogEntry, VersionDownloads
from sitegen.service import create_app


def _meta() -> GlobalMeta:
    apk = DownloadEntry(name="APK", filename="a.apk", download_url="https://x.org/files/1_2_0/a.apk")
    platform = PlatformCatalogEntry(
        title="Android", platform_badge="/img/android.svg", platform_key="android", downloads=[apk]
    )
    row = VersionDownloads(version="1.2.0", downloads=(apk.model_copy(update={"icon": "/img/android.svg"}),))
    return GlobalMeta(app_version="1.2.0", platforms=(platform,), version_downloads=(row,), prod=True)


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(_meta))


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "app_version": "1.2.0"}


def test_meta_endpoint_omits_unset_fields(client: TestClient) -> None:
    response = client.get("/api/meta")
    assert response.status_code == 200
    data = response.json()
    assert data["app_version"] == "1.2.0"
    assert data["prod"] is True
    assert data["platforms"][0]["downloads"][0] == {
        "name": "APK",
        "filename": "a.apk",
        "download_url": "https://x.org/files/1_2_0/a.apk",
        "gold": False,
    }


def test_latest_and_history_endpoints(client: TestClient) -> None:
    latest = client.get("/api/downloads/latest").json()
    assert latest["app_version"] == "1.2.0"
    assert latest["platforms"][0]["platform_key"] == "android"

    history = client.get("/api/downloads/history").json()
    assert [row["version"] for row in history["version_downloads"]] == ["1.2.0"]
    assert history["version_downloads"][0]["downloads"][0]["icon"] == "/img/android.svg"


def test_meta_factory_runs_once() -> None:
    calls: list[int] = []

    def factory() -> GlobalMeta:
        calls.append(1)
        return _meta()

    client = TestClient(create_app(factory))
    client.get("/health")
    client.get("/api/meta")

    assert len(calls) == 1


def test_site_directory_is_served(tmp_path: Path) -> None:
    (tmp_path / "index.html").write_text("<p>home</p>", encoding="utf-8")
    (tmp_path / "downloads").mkdir()
    (tmp_path / "downloads" / "index.html").write_text("<p>dl</p>", encoding="utf-8")

    client = TestClient(create_app(_meta, tmp_path))

    assert client.get("/").text == "<p>home</p>"
    assert client.get("/downloads/").text == "<p>dl</p>"
    assert client.get("/health").json()["status"] == "ok"
