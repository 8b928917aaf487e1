"""
Scan Simulator Service.

Runs the timed mock analysis. State machine:

    idle -> scanning -> complete
    scanning -> idle        (cancel_scan, reset)
    complete -> idle        (reset)
    complete -> scanning    (start_scan only)

Each scan carries a generation token; a completion whose token is no longer
current is dropped, so a cancelled scan can never publish a result.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable

from ...core.logging import get_logger
from ...models.scan import ScanResult, ScanState
from .classifier import Classifier, MockMenuClassifier

logger = get_logger(__name__)

DEFAULT_LATENCY_SECONDS = 3.0


class ScanSimulator:
    """Timed, cancellable mock menu scan."""

    def __init__(
        self,
        classifier: Classifier | None = None,
        latency_seconds: float = DEFAULT_LATENCY_SECONDS,
        on_complete: Callable[[ScanResult], None] | None = None,
    ) -> None:
        """Initialize the simulator.

        Args:
            classifier: Produces the result content. Defaults to the mock menu.
            latency_seconds: Simulated analysis time.
            on_complete: Optional callback invoked with each published result.
        """
        self.classifier = classifier or MockMenuClassifier()
        self.latency_seconds = latency_seconds
        self.on_complete = on_complete
        self.state = ScanState.IDLE
        self.result: ScanResult | None = None
        self._task: asyncio.Task[ScanResult | None] | None = None
        self._generation = 0

    @property
    def is_scanning(self) -> bool:
        return self.state == ScanState.SCANNING

    def start_scan(self, active_filters: Iterable[str]) -> bool:
        """Begin a scan against the given filters.

        Must be called from within a running event loop.

        Args:
            active_filters: Filters the result should be computed for.

        Returns:
            True if a scan was started, False if one was already in flight.
        """
        if self.state == ScanState.SCANNING:
            logger.debug("Scan already in progress")
            return False

        self._generation += 1
        self.result = None
        self.state = ScanState.SCANNING
        filters = frozenset(active_filters)
        self._task = asyncio.get_running_loop().create_task(
            self._run(self._generation, filters)
        )
        logger.info("Scan started", filters=sorted(filters), latency=self.latency_seconds)
        return True

    async def _run(self, token: int, filters: frozenset[str]) -> ScanResult | None:
        await asyncio.sleep(self.latency_seconds)
        if token != self._generation:
            return None

        try:
            result = self.classifier.classify(filters)
        except Exception as e:
            logger.error("Classifier failed", error=str(e))
            self.state = ScanState.IDLE
            self._task = None
            return None

        self.result = result
        self.state = ScanState.COMPLETE
        self._task = None
        logger.info(
            "Scan complete",
            safe=len(result.safe_items),
            risky=len(result.risky_items),
            allergens=sorted(result.allergens_detected),
        )
        if self.on_complete is not None:
            self.on_complete(result)
        return result

    def cancel_scan(self) -> bool:
        """Abort the in-flight scan and discard its pending result.

        Returns:
            True if a scan was cancelled, False if none was running.
        """
        if self.state != ScanState.SCANNING:
            return False

        self._generation += 1
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
        self.state = ScanState.IDLE
        self.result = None
        logger.info("Scan cancelled")
        return True

    def reset(self) -> None:
        """Return to idle, cancelling any scan and dropping the last result."""
        if self.cancel_scan():
            return
        if self.result is not None:
            logger.debug("Scan result discarded")
        self.state = ScanState.IDLE
        self.result = None

    async def wait(self) -> ScanResult | None:
        """Wait for the in-flight scan, if any.

        Returns:
            The current result, or None if the scan was cancelled or failed.
        """
        task = self._task
        if task is not None:
            await asyncio.wait({task})
        return self.result
