"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based (async) UI automation framework for the storefront suite.

Components:
    - smart_locator: Lazy, frame-aware semantic element resolution
    - waits: Timeout budgets and bounded polling
    - page_base: Base page object (navigation, evidence, diagnostics)
    - browser_manager: Browser/context lifecycle, trace and video artifacts
    - scenario: Ordered named-step pipeline with evidence capture

Author: Automation Team
License: MIT
================================================================================
"""

from .smart_locator import ElementNotFoundError, ElementSpec, SmartLocator
from .waits import PollConfig, WaitTimeoutError, poll_until, timeout_for
from .page_base import BasePage, NavigationError, PageBase
from .browser_manager import BrowserManager
from .scenario import Scenario, ScenarioStep, ScenarioTimeoutError

__all__ = [
    "BasePage",
    "BrowserManager",
    "ElementNotFoundError",
    "ElementSpec",
    "NavigationError",
    "PageBase",
    "PollConfig",
    "Scenario",
    "ScenarioStep",
    "ScenarioTimeoutError",
    "SmartLocator",
    "WaitTimeoutError",
    "poll_until",
    "timeout_for",
]
