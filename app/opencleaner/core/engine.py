"""Scan engine that runs the registered scanners concurrently.

The engine owns the list of scanners and a single "scan in progress"
flag. A second scan started while one is running fails immediately
instead of waiting.
"""

import logging
import threading
import time
from collections.abc import Iterable
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait

from opencleaner.models.item import CleanupCategory, CleanupItem
from opencleaner.models.scan_result import ScanResult
from opencleaner.scanners.base import Scanner

logger = logging.getLogger(__name__)


class ScanError(Exception):
    """Base exception for scan engine errors."""


class AlreadyScanningError(ScanError):
    """Raised when a scan is started while another one is running."""

    def __init__(self) -> None:
        super().__init__("A scan is already in progress")


class ScanEngine:
    """Runs scanners in parallel and merges their results.

    Args:
        max_workers: Upper bound on concurrently running scanners.
            Defaults to one thread per selected scanner.
    """

    def __init__(self, max_workers: int | None = None) -> None:
        self._scanners: list[Scanner] = []
        self._max_workers = max_workers
        self._lock = threading.Lock()
        self._scanning = False

    @property
    def scanners(self) -> tuple[Scanner, ...]:
        """Registered scanners, in registration order."""
        return tuple(self._scanners)

    def register(self, scanner: Scanner) -> None:
        """Register a scanner. Duplicates are not filtered."""
        self._scanners.append(scanner)

    def register_all(self, scanners: Iterable[Scanner]) -> None:
        """Register several scanners at once."""
        self._scanners.extend(scanners)

    def is_scanning(self) -> bool:
        """Check whether a scan is currently running."""
        with self._lock:
            return self._scanning

    def scan(self, categories: Iterable[CleanupCategory] | None = None) -> ScanResult:
        """Run the selected scanners and merge their items.

        Args:
            categories: Restrict the scan to these categories. All
                registered scanners run when None.

        Returns:
            ScanResult with items sorted by descending size.

        Raises:
            AlreadyScanningError: If another scan is in progress.
            Exception: The first exception raised by any scanner. No
                partial result is returned in that case.
        """
        with self._lock:
            if self._scanning:
                raise AlreadyScanningError()
            self._scanning = True

        try:
            return self._run(set(categories) if categories is not None else None)
        finally:
            with self._lock:
                self._scanning = False

    def _run(self, wanted: set[CleanupCategory] | None) -> ScanResult:
        start = time.monotonic()

        active = [
            scanner
            for scanner in self._scanners
            if wanted is None or wanted.intersection(scanner.categories)
        ]

        items: list[CleanupItem] = []
        if active:
            for scanner_items in self._run_scanners(active):
                items.extend(scanner_items)

        if wanted is not None:
            items = [item for item in items if item.category in wanted]

        # Stable: equal sizes keep registration order
        items.sort(key=lambda item: item.size, reverse=True)

        duration = time.monotonic() - start
        result = ScanResult(
            items=items,
            scan_duration=duration,
            scanned_categories=[scanner.category for scanner in active],
        )
        logger.info(
            "Scan finished: %d scanners, %d items, %s in %.2fs",
            len(active),
            len(items),
            result.total_size_human,
            duration,
        )
        return result

    def _run_scanners(self, scanners: list[Scanner]) -> list[list[CleanupItem]]:
        max_workers = self._max_workers or len(scanners)

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures: list[Future[list[CleanupItem]]] = [
                executor.submit(scanner.scan) for scanner in scanners
            ]
            done, pending = wait(futures, return_when=FIRST_EXCEPTION)

            for scanner, future in zip(scanners, futures, strict=True):
                if future not in done:
                    continue
                exc = future.exception()
                if exc is not None:
                    for other in pending:
                        other.cancel()
                    logger.error("Scanner %s failed: %s", type(scanner).__name__, exc)
                    raise exc

            return [future.result() for future in futures]
