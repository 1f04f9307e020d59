from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from testsuites.ui_testing.framework.browser_manager import (
    RETRY_ATTEMPT_VAR,
    BrowserManager,
    artifact_mode,
    artifact_slug,
    retry_attempt,
)


@pytest.mark.parametrize("value, expected", [("0", 0), ("2", 2), ("junk", 0)])
def test_retry_attempt(monkeypatch, value, expected):
    monkeypatch.setenv(RETRY_ATTEMPT_VAR, value)
    assert retry_attempt() == expected


def test_artifact_slug_is_filesystem_safe():
    slug = artifact_slug("testsuites/ui_testing/tests/test_checkout_e2e.py::TestCheckoutFlow::test_x[gw0]")
    assert "/" not in slug and ":" not in slug and "[" not in slug
    assert slug.endswith("test_x_gw0")


@pytest.mark.parametrize("attempt, expected", [("0", False), ("1", True)])
def test_trace_recorded_only_on_retry(monkeypatch, attempt, expected):
    monkeypatch.setenv(RETRY_ATTEMPT_VAR, attempt)
    manager = BrowserManager(base_url="https://shop.example.com")
    manager.trace_mode = "on-first-retry"

    assert manager.record_trace is expected


def test_context_options(tmp_path):
    manager = BrowserManager(base_url="https://shop.example.com", headless=True)
    manager.artifacts_dir = tmp_path

    options = manager.context_options(locale="en-US")

    assert options["viewport"] == {"width": 1440, "height": 900}
    assert options["base_url"] == "https://shop.example.com"
    assert options["record_video_dir"] == str(tmp_path / "videos")
    assert options["locale"] == "en-US"


async def test_new_context_requires_started_browser():
    with pytest.raises(RuntimeError, match="Browser not started"):
        await BrowserManager().new_context()


def _context_with_video(videos_dir, name):
    source = videos_dir / f"{name}.webm"
    source.write_bytes(b"webm")
    page = MagicMock()
    page.video.path = AsyncMock(return_value=str(source))
    context = MagicMock()
    context.pages = [page]
    context.close = AsyncMock()
    return context, source


async def test_video_kept_only_on_failure(tmp_path):
    manager = BrowserManager(base_url="https://shop.example.com")
    manager.artifacts_dir = tmp_path
    manager.video_mode = "retain-on-failure"
    videos = tmp_path / "videos"
    videos.mkdir()

    passed_ctx, passed_video = _context_with_video(videos, "raw-1")
    kept = await manager.finalize_context(passed_ctx, "test_ok", failed=False)
    assert kept == []
    assert not passed_video.exists()

    failed_ctx, failed_video = _context_with_video(videos, "raw-2")
    kept = await manager.finalize_context(failed_ctx, "test_bad", failed=True)
    assert kept == [tmp_path / "videos" / "test_bad.webm"]
    assert Path(kept[0]).read_bytes() == b"webm"
    assert not failed_video.exists()


async def test_video_always_kept_when_mode_is_on(tmp_path):
    manager = BrowserManager(base_url="https://shop.example.com")
    manager.artifacts_dir = tmp_path
    manager.video_mode = "on"
    videos = tmp_path / "videos"
    videos.mkdir()

    context, source = _context_with_video(videos, "raw-1")
    kept = await manager.finalize_context(context, "test_ok", failed=False)

    assert kept == [videos / "test_ok.webm"]
    assert not source.exists()


@pytest.mark.parametrize(
    "value, expected",
    [(True, "on"), (False, "off"), (None, "off"), ("Retain-On-Failure", "retain-on-failure")],
)
def test_artifact_mode_accepts_yaml_booleans(value, expected):
    assert artifact_mode(value) == expected


def test_video_mode_read_from_config(monkeypatch):
    # an unquoted `video: on` in YAML loads as True
    monkeypatch.setattr(
        "testsuites.ui_testing.framework.browser_manager.get_config",
        lambda key, default=None: True if key == "artifacts.video" else default,
    )
    manager = BrowserManager(base_url="https://shop.example.com")

    assert manager.video_mode == "on"
    assert manager.record_video is True
