"""
================================================================================
Scenario Pipeline
================================================================================

Runs a user journey as an ordered list of named steps.

    - Each step receives the previous step's result and returns its own
    - Results are kept by step name for later steps that need them
    - Each step is an Allure step; evidence screenshots are taken at the step
      boundary whether the step passed or failed
    - The whole journey is bounded by a single timeout

Usage:
    scenario = Scenario("checkout", evidence=home.save_evidence)
    await scenario.run([
        ScenarioStep("Select a product", pick_product, evidence="03-product-detail"),
        ScenarioStep("Add product to cart", add_to_cart, evidence="04-added-to-cart"),
    ])

================================================================================
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Tuple

import allure
from loguru import logger

from .waits import SCENARIO_TIMEOUT_SECONDS


StepAction = Callable[[Any], Awaitable[Any]]
EvidenceHook = Callable[[str], Awaitable[Any]]


class ScenarioTimeoutError(Exception):
    """Raised when the whole scenario exceeds its time budget."""
    pass


@dataclass
class ScenarioStep:
    """
    One named step of a journey.

    Attributes:
        name: Step name shown in logs and reports
        action: Async callable taking the previous step's result
        evidence: Evidence names captured after the step, in order
    """
    name: str
    action: StepAction
    evidence: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.evidence, str):
            self.evidence = (self.evidence,)


@dataclass
class StepOutcome:
    name: str
    passed: bool
    duration_s: float
    result: Any = None
    error: Optional[BaseException] = None
    evidence: List[str] = field(default_factory=list)


class Scenario:
    """Executes `ScenarioStep`s in order, stopping at the first failure."""

    def __init__(
        self,
        name: str,
        evidence: Optional[EvidenceHook] = None,
        timeout: float = SCENARIO_TIMEOUT_SECONDS,
    ):
        """
        Args:
            name: Scenario name
            evidence: Async hook saving one evidence artifact by name
            timeout: Budget for the whole scenario in seconds
        """
        self.name = name
        self._evidence_hook = evidence
        self.timeout = timeout
        self.outcomes: List[StepOutcome] = []
        self.results: Dict[str, Any] = {}

    def result_of(self, step_name: str) -> Any:
        """Result returned by an earlier step."""
        if step_name not in self.results:
            raise KeyError(f"Step has not produced a result yet: {step_name}")
        return self.results[step_name]

    async def capture_evidence(self, name: str) -> bool:
        """
        Save one evidence artifact.

        Capture problems are logged; they never replace the step's own outcome.
        """
        if self._evidence_hook is None:
            return False
        try:
            await self._evidence_hook(name)
            return True
        except Exception as e:
            logger.warning(f"[{self.name}] evidence '{name}' not captured: {e}")
            return False

    async def run_step(self, step: ScenarioStep, previous: Any = None) -> Any:
        """Run one step with reporting and evidence capture."""
        outcome = StepOutcome(name=step.name, passed=False, duration_s=0.0)
        self.outcomes.append(outcome)
        started = time.monotonic()
        logger.info(f"[{self.name}] step: {step.name}")

        with allure.step(step.name):
            try:
                outcome.result = await step.action(previous)
                outcome.passed = True
            except BaseException as e:
                outcome.error = e
                logger.error(f"[{self.name}] step failed: {step.name}: {e}")
                raise
            finally:
                outcome.duration_s = time.monotonic() - started
                for name in step.evidence:
                    if await self.capture_evidence(name):
                        outcome.evidence.append(name)

        self.results[step.name] = outcome.result
        return outcome.result

    async def _run_all(self, steps: Sequence[ScenarioStep]) -> Any:
        previous: Any = None
        for step in steps:
            previous = await self.run_step(step, previous)
        return previous

    async def run(self, steps: Sequence[ScenarioStep]) -> Any:
        """
        Run all steps in order.

        Returns:
            The last step's result

        Raises:
            ScenarioTimeoutError: If the scenario exceeds its budget
        """
        logger.info(f"[{self.name}] starting scenario ({len(steps)} steps, timeout={self.timeout}s)")
        try:
            result = await asyncio.wait_for(self._run_all(steps), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            # A step's own TimeoutError is the same class on Python 3.11+
            if self.outcomes and self.outcomes[-1].error is e:
                raise
            running = self.outcomes[-1].name if self.outcomes else "<none>"
            raise ScenarioTimeoutError(
                f"Scenario '{self.name}' exceeded {self.timeout}s (in step: {running})"
            ) from e

        logger.info(f"[{self.name}] scenario passed: {self.summary()}")
        return result

    def summary(self) -> str:
        return ", ".join(
            f"{o.name}={'ok' if o.passed else 'FAILED'} ({o.duration_s:.1f}s)" for o in self.outcomes
        )


__all__ = [
    "Scenario",
    "ScenarioStep",
    "ScenarioTimeoutError",
    "StepOutcome",
]
