"""
================================================================================
Smart Locator
================================================================================

Semantic element resolution for page objects:
    - Elements are declared as `ElementSpec` (ARIA role + name, label, text,
      placeholder or CSS) with optional ordered fallbacks
    - Resolution returns a *lazy* Playwright Locator: nothing touches the DOM
      until an action or assertion runs, so handles are never stale
    - Resolvers can be scoped to a sub-tree or to an embedded frame
    - Presence of conditionally-rendered elements is probed explicitly

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Pattern, Tuple, Union

from loguru import logger
from playwright.async_api import FrameLocator, Locator, Page


Scope = Union[Page, Locator, FrameLocator]
TextMatch = Union[str, Pattern[str]]


class ElementNotFoundError(Exception):
    """Raised when an element spec cannot be turned into a locator."""
    pass


@dataclass(frozen=True)
class ElementSpec:
    """
    Semantic description of a UI element.

    Exactly one strategy field should be set per spec; alternatives go in
    `fallbacks` and are tried in order by the browser (Locator.or_).

    Attributes:
        name: Human-readable element name used in logs and assertion messages
        role: ARIA role (e.g. "button", "heading", "link", "tab")
        role_name: Accessible name for the role query
        label: Associated label text (get_by_label)
        text: Visible text (get_by_text)
        placeholder: Input placeholder
        css: CSS / Playwright selector
        has_text: Narrow a CSS match to nodes containing this text
        exact: Exact string matching for str patterns
        first: Resolve to the first match only
        fallbacks: Alternative specs, in priority order
    """
    name: str
    role: Optional[str] = None
    role_name: Optional[TextMatch] = None
    label: Optional[TextMatch] = None
    text: Optional[TextMatch] = None
    placeholder: Optional[TextMatch] = None
    css: Optional[str] = None
    has_text: Optional[TextMatch] = None
    exact: bool = False
    first: bool = False
    fallbacks: Tuple["ElementSpec", ...] = field(default_factory=tuple)

    @property
    def strategy(self) -> str:
        if self.role:
            return f"role={self.role}[name={self.role_name!r}]"
        if self.label is not None:
            return f"label={self.label!r}"
        if self.text is not None:
            return f"text={self.text!r}"
        if self.placeholder is not None:
            return f"placeholder={self.placeholder!r}"
        if self.css:
            return f"css={self.css}"
        return "<undefined>"


class SmartLocator:
    """
    Resolves `ElementSpec`s against a scope (page, sub-tree or frame).

    Usage:
        >>> smart = SmartLocator(page)
        >>> login = smart.within("turbo-frame#login")
        >>> email = login.resolve(ElementSpec("Email", label=re.compile("email", re.I)))
        >>> await email.fill("user@example.com")

        >>> card = smart.frame('iframe[title="Secure payment input frame"]')
        >>> await card.by_role("tab", re.compile("^card$", re.I)).click()
    """

    def __init__(self, scope: Scope, scope_name: str = "page"):
        """
        Initialize SmartLocator.

        Args:
            scope: Playwright Page, Locator or FrameLocator queries start from
            scope_name: Human-readable scope name for logging
        """
        self.scope = scope
        self.scope_name = scope_name

    # =========================================================================
    # Scoping
    # =========================================================================

    def within(self, target: Union[str, Locator], name: Optional[str] = None) -> "SmartLocator":
        """Return a resolver scoped to a sub-tree (selector or locator)."""
        scope = self.scope.locator(target) if isinstance(target, str) else target
        return SmartLocator(scope, scope_name=name or f"{self.scope_name} > {target}")

    def frame(self, selector: str, name: Optional[str] = None) -> "SmartLocator":
        """Return a resolver scoped to the document of an embedded frame."""
        return SmartLocator(
            self.scope.frame_locator(selector),
            scope_name=name or f"{self.scope_name} >> frame {selector}",
        )

    # =========================================================================
    # Resolution
    # =========================================================================

    def _build(self, spec: ElementSpec) -> Locator:
        if spec.role:
            if spec.role_name is None:
                return self.scope.get_by_role(spec.role)
            return self.scope.get_by_role(spec.role, name=spec.role_name, exact=spec.exact)
        if spec.label is not None:
            return self.scope.get_by_label(spec.label, exact=spec.exact)
        if spec.text is not None:
            return self.scope.get_by_text(spec.text, exact=spec.exact)
        if spec.placeholder is not None:
            return self.scope.get_by_placeholder(spec.placeholder, exact=spec.exact)
        if spec.css:
            if spec.has_text is not None:
                return self.scope.locator(spec.css, has_text=spec.has_text)
            return self.scope.locator(spec.css)
        raise ElementNotFoundError(
            f"No locator strategy defined for element: {spec.name} (scope: {self.scope_name})"
        )

    def resolve(self, spec: ElementSpec) -> Locator:
        """
        Build a lazy locator for ``spec``.

        Fallbacks are merged with ``Locator.or_`` so the browser picks
        whichever strategy matches at the moment of use.

        Raises:
            ElementNotFoundError: If the spec (or a fallback) has no strategy
        """
        locator = self._build(spec)
        for fallback in spec.fallbacks:
            locator = locator.or_(self._build(fallback))

        if spec.fallbacks:
            logger.debug(
                f"Resolved '{spec.name}' in {self.scope_name}: {spec.strategy} "
                f"(+{len(spec.fallbacks)} fallback(s))"
            )
        return locator.first if spec.first else locator

    def css(self, selector: str, has_text: Optional[TextMatch] = None) -> Locator:
        if has_text is None:
            return self.scope.locator(selector)
        return self.scope.locator(selector, has_text=has_text)

    def by_role(self, role: str, name: Optional[TextMatch] = None, exact: bool = False) -> Locator:
        if name is None:
            return self.scope.get_by_role(role)
        return self.scope.get_by_role(role, name=name, exact=exact)

    def by_label(self, label: TextMatch, exact: bool = False) -> Locator:
        return self.scope.get_by_label(label, exact=exact)

    def by_text(self, text: TextMatch, exact: bool = False) -> Locator:
        return self.scope.get_by_text(text, exact=exact)

    # =========================================================================
    # Presence Probes
    # =========================================================================

    @staticmethod
    async def exists(locator: Locator) -> bool:
        """True when at least one node currently matches (no waiting)."""
        return await locator.count() > 0

    @staticmethod
    async def is_visible(locator: Locator) -> bool:
        """Current visibility of the first match; False when nothing matches."""
        return await locator.first.is_visible()


__all__ = [
    "ElementNotFoundError",
    "ElementSpec",
    "Scope",
    "SmartLocator",
]
