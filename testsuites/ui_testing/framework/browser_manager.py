"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for UI automation.

Features:
    - One browser per test process, one isolated context per test
    - Viewport, base URL and default timeouts from configuration
    - Trace recording on retry runs, video kept per `artifacts.video`

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
import re
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Playwright,
)

from storefront_tools.common import get_config, resolve_path

# Set by run_tests.py on re-runs of failed tests (0 = first attempt)
RETRY_ATTEMPT_VAR = "E2E_RETRY_ATTEMPT"


def retry_attempt() -> int:
    try:
        return int(os.environ.get(RETRY_ATTEMPT_VAR, "0"))
    except ValueError:
        return 0


def artifact_slug(name: str) -> str:
    """Turn a pytest node id into a filesystem-safe name."""
    return re.sub(r"[^A-Za-z0-9_.-]+", "_", name).strip("_")[:120]


def artifact_mode(value: Any) -> str:
    """Normalise a trace/video mode; YAML and env overrides turn bare on/off into booleans."""
    if value is True:
        return "on"
    if value is False or value is None:
        return "off"
    return str(value).strip().lower()


class BrowserManager:
    """
    Manages the browser instance and per-test contexts.

    Usage:
        async with BrowserManager(base_url=env.base_url) as manager:
            context = await manager.new_context()
            page = await context.new_page()
            ...
            await manager.finalize_context(context, "test_checkout", failed=False)
    """

    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": True,
        "args": [
            "--ignore-certificate-errors",
        ],
    }

    def __init__(
        self,
        base_url: Optional[str] = None,
        headless: Optional[bool] = None,
        browser_type: Optional[str] = None,
    ):
        """
        Initialize browser manager.

        Args:
            base_url: Base URL applied to every context (relative goto support)
            headless: Run browser in headless mode. Defaults to `browser.headless`.
            browser_type: 'chromium', 'firefox' or 'webkit'. Defaults to `browser.type`.
        """
        self.base_url = base_url
        self.headless = get_config("browser.headless", True) if headless is None else headless
        self.browser_type = browser_type or get_config("browser.type", "chromium")

        self.trace_mode = artifact_mode(get_config("artifacts.trace", "on-first-retry"))
        self.video_mode = artifact_mode(get_config("artifacts.video", "retain-on-failure"))
        self.artifacts_dir = resolve_path("artifacts.artifacts_dir", "test-results/artifacts")

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []
        self._tracing: Dict[int, bool] = {}

    async def __aenter__(self) -> "BrowserManager":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def start(self) -> None:
        """Start Playwright and launch browser."""
        self._playwright = await async_playwright().start()

        if self.browser_type == "firefox":
            browser_launcher = self._playwright.firefox
        elif self.browser_type == "webkit":
            browser_launcher = self._playwright.webkit
        else:
            browser_launcher = self._playwright.chromium

        launch_options = {
            **self.DEFAULT_LAUNCH_OPTIONS,
            "headless": self.headless,
        }

        self._browser = await browser_launcher.launch(**launch_options)
        logger.debug(
            f"Browser started: {self.browser_type} "
            f"(headless={self.headless})"
        )

    async def close(self) -> None:
        """Close all contexts and browser."""
        for context in list(self._contexts):
            await context.close()
        self._contexts.clear()

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    # =========================================================================
    # Contexts
    # =========================================================================

    @property
    def record_video(self) -> bool:
        return self.video_mode != "off"

    @property
    def record_trace(self) -> bool:
        if self.trace_mode == "on-first-retry":
            return retry_attempt() >= 1
        return self.trace_mode in ("on", "retain-on-failure")

    def context_options(self, **overrides: Any) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "viewport": {
                "width": int(get_config("browser.viewport.width", 1440)),
                "height": int(get_config("browser.viewport.height", 900)),
            },
            "ignore_https_errors": True,
        }
        if self.base_url:
            options["base_url"] = self.base_url
        if self.record_video:
            options["record_video_dir"] = str(self.artifacts_dir / "videos")
        options.update(overrides)
        return options

    async def new_context(self, **options: Any) -> BrowserContext:
        """
        Create a new isolated browser context.

        Each context is isolated - separate cookies, localStorage, etc.

        Args:
            **options: Overrides for the default context options
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context = await self._browser.new_context(**self.context_options(**options))
        context.set_default_timeout(int(get_config("browser.action_timeout", 15000)))
        context.set_default_navigation_timeout(int(get_config("browser.navigation_timeout", 30000)))

        if self.record_trace:
            await context.tracing.start(screenshots=True, snapshots=True, sources=True)
            self._tracing[id(context)] = True

        self._contexts.append(context)
        return context

    async def finalize_context(self, context: BrowserContext, test_name: str, failed: bool) -> List[Path]:
        """
        Close a context and keep its trace/video according to the outcome.

        Args:
            context: Context created by `new_context`
            test_name: Test identifier used for artifact names
            failed: Whether the test failed

        Returns:
            Paths of retained artifacts
        """
        slug = artifact_slug(test_name)
        kept: List[Path] = []

        if self._tracing.pop(id(context), False):
            keep_trace = failed or self.trace_mode == "on"
            if keep_trace:
                trace_path = self.artifacts_dir / "traces" / f"{slug}-attempt{retry_attempt()}.zip"
                trace_path.parent.mkdir(parents=True, exist_ok=True)
                await context.tracing.stop(path=str(trace_path))
                kept.append(trace_path)
            else:
                await context.tracing.stop()

        videos = [page.video for page in context.pages if page.video]
        await context.close()
        if context in self._contexts:
            self._contexts.remove(context)

        keep_video = self.video_mode == "on" or (failed and self.video_mode == "retain-on-failure")
        for video in videos:
            source = Path(await video.path())
            if keep_video:
                target = self.artifacts_dir / "videos" / f"{slug}{source.suffix}"
                shutil.move(str(source), str(target))
                kept.append(target)
            else:
                source.unlink(missing_ok=True)

        for path in kept:
            logger.info(f"Retained artifact: {path}")
        return kept


__all__ = [
    "BrowserManager",
    "RETRY_ATTEMPT_VAR",
    "artifact_mode",
    "artifact_slug",
    "retry_attempt",
]
