from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.site_fixture import SiteFixture


@pytest.fixture
def site(tmp_path: Path) -> SiteFixture:
    """Provide an empty site root under the pytest tmp_path."""
    return SiteFixture(tmp_path)


@pytest.fixture
def platforms() -> list[dict]:
    """A small two-platform catalog exercising badges, gold and store entries."""
    return [
        {
            "title": "Android",
            "platform_badge": "/img/android.svg",
            "platform_key": "android",
            "downloads": [
                {"name": "APK", "filename": "a.apk", "short_name": "apk"},
                {"name": "Gold APK", "filename": "a_gold.apk", "gold": True},
                {"name": "Play Store", "url": "https://play.example.com/app"},
            ],
        },
        {
            "title": "Windows",
            "platform_badge": "/img/windows.svg",
            "platform_key": "windows",
            "downloads": [
                {"name": "Installer", "filename": "b.exe"},
                {"name": "Portable", "filename": "b.zip"},
            ],
        },
    ]


@pytest.fixture(autouse=True)
def _reset_sitegen_logger():
    """Undo CLI logging configuration so caplog keeps receiving records."""
    yield
    logger = logging.getLogger("sitegen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
