"""Scan orchestration and owned scan state.

The ScanOrchestrator owns the ResultStore and the ScanStatus of one
process. It runs the walker once, then each enabled classifier over the
complete file list, and exposes deletion against the stored records.

Only one scan or delete runs at a time. A second request made while
one is in progress is rejected with OperationInProgressError rather
than resetting shared state under the running operation.
"""

import logging
import threading
from collections.abc import Callable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import contextmanager
from pathlib import Path

from reclaim.core.config import ReclaimConfig
from reclaim.core.errors import OperationInProgressError
from reclaim.core.store import ResultStore
from reclaim.models.record import Category, DeleteOutcome, FileRecord
from reclaim.models.status import ScanOptions, ScanStatus
from reclaim.operator.deleter import DeletionEngine
from reclaim.scanner.base import Classifier
from reclaim.scanner.duplicates import DuplicateDetector
from reclaim.scanner.empty import EmptyClassifier
from reclaim.scanner.logs import LogClassifier
from reclaim.scanner.temp import TempClassifier
from reclaim.scanner.walker import DirectoryWalker

logger = logging.getLogger(__name__)


class _ScanCancelled(Exception):
    """Internal signal used to unwind a pass after cancel()."""


class ScanOrchestrator:
    """Runs scans and deletions against a single owned result set.

    Args:
        config: Configuration supplying default roots, hashing workers
            and the secure wipe length. Defaults to ReclaimConfig().
        classifiers: Optional override of the per-category classifiers.

    Example:
        >>> orchestrator = ScanOrchestrator()
        >>> records = orchestrator.scan(ScanOptions(path="/home/me/Downloads"))
        >>> outcomes = orchestrator.delete([r.id for r in records if r.selected])
    """

    def __init__(
        self,
        config: ReclaimConfig | None = None,
        classifiers: dict[Category, Classifier] | None = None,
    ) -> None:
        self._config = config or ReclaimConfig()
        self._classifiers = classifiers or {
            Category.DUPLICATE: DuplicateDetector(workers=self._config.hash_workers),
            Category.LOG: LogClassifier(),
            Category.TEMP: TempClassifier(),
            Category.EMPTY: EmptyClassifier(),
        }
        self._store = ResultStore()
        self._status = ScanStatus()
        self._status_lock = threading.Lock()
        self._busy = threading.Lock()
        self._cancel = threading.Event()
        self._executor: ThreadPoolExecutor | None = None

    @property
    def store(self) -> ResultStore:
        """Result store of the most recent scan."""
        return self._store

    # === Queries ===

    def status(self) -> ScanStatus:
        """Get a snapshot of the current scan status.

        Never waits on scan work; the status lock is only held while a
        snapshot is swapped in or read.
        """
        with self._status_lock:
            return self._status

    def results(self) -> list[FileRecord]:
        """Get the records currently held from the most recent scan."""
        return self._store.records()

    def reclaimable_mb(self) -> float:
        """Total size of all currently flagged records."""
        return self._store.reclaimable_mb()

    @property
    def busy(self) -> bool:
        """Whether a scan or delete is in progress."""
        return self._busy.locked()

    # === Scan ===

    def resolve_roots(self, options: ScanOptions, roots: list[Path] | None = None) -> list[Path]:
        """Determine the roots a scan will walk.

        ``options.path`` wins over ``roots``, which wins over the
        configured defaults. Roots that are not existing directories
        are dropped.

        Args:
            options: Scan options with optional path override.
            roots: Caller-supplied roots.

        Returns:
            Existing root directories in order.
        """
        if options.path:
            candidates = [Path(options.path).expanduser()]
        elif roots:
            candidates = list(roots)
        else:
            candidates = self._config.resolved_roots()

        resolved = [root for root in candidates if root.is_dir()]
        for root in candidates:
            if root not in resolved:
                logger.debug("Skipping missing root: %s", root)
        return resolved

    def scan(self, options: ScanOptions, roots: list[Path] | None = None) -> list[FileRecord]:
        """Run a scan and block until it finishes.

        Args:
            options: Which categories to scan for and optional root override.
            roots: Roots to scan when options.path is not set.

        Returns:
            Records found, in classifier order.

        Raises:
            OperationInProgressError: If a scan or delete is already running.
        """
        self._acquire("scan")
        self._cancel.clear()
        try:
            return self._run_scan(options, roots)
        finally:
            self._busy.release()

    def start(
        self, options: ScanOptions, roots: list[Path] | None = None
    ) -> Future[list[FileRecord]]:
        """Start a scan on a background thread.

        The busy check happens here, in the caller's thread, so a
        rejected request fails immediately.

        Args:
            options: Which categories to scan for and optional root override.
            roots: Roots to scan when options.path is not set.

        Returns:
            Future resolving to the records found.

        Raises:
            OperationInProgressError: If a scan or delete is already running.
        """
        self._acquire("scan")
        self._cancel.clear()
        # Visible as running before the worker thread picks the job up
        self._set_status(ScanStatus.started())
        try:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=1, thread_name_prefix="reclaim-scan"
                )
            return self._executor.submit(self._run_scan_and_release, options, roots)
        except RuntimeError:
            self._busy.release()
            raise

    def cancel(self) -> bool:
        """Ask a running scan to stop at the next file boundary.

        The scan ends with running=False, cancelled=True and returns
        whatever records were found so far.

        Returns:
            True if a scan was running when cancel was requested.
        """
        if not self.status().running:
            return False
        self._cancel.set()
        return True

    def shutdown(self) -> None:
        """Stop the background scan thread, cancelling any running scan."""
        self.cancel()
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    # === Delete ===

    def delete(
        self, ids: list[str], secure: bool = False, dry_run: bool = False
    ) -> list[DeleteOutcome]:
        """Delete records of the most recent scan.

        Args:
            ids: Record ids to delete; unknown ids produce no outcome.
            secure: Zero the start of each file before unlinking.
            dry_run: Report without deleting.

        Returns:
            Outcomes for each known id.

        Raises:
            OperationInProgressError: If a scan or delete is already running.
        """
        with self._exclusive("delete"):
            engine = DeletionEngine(
                self._store,
                dry_run=dry_run,
                wipe_limit_bytes=self._config.wipe_limit_bytes,
            )
            return engine.delete(ids, secure=secure)

    # === Internals ===

    def _acquire(self, operation: str) -> None:
        """Take the operation lock or reject the request."""
        if not self._busy.acquire(blocking=False):
            msg = f"Cannot start {operation}: another scan or delete is in progress"
            raise OperationInProgressError(msg)

    @contextmanager
    def _exclusive(self, operation: str) -> Iterator[None]:
        """Hold the operation lock for the duration of a block."""
        self._acquire(operation)
        try:
            yield
        finally:
            self._busy.release()

    def _run_scan_and_release(
        self, options: ScanOptions, roots: list[Path] | None
    ) -> list[FileRecord]:
        try:
            return self._run_scan(options, roots)
        finally:
            self._busy.release()

    def _set_status(self, status: ScanStatus) -> None:
        with self._status_lock:
            self._status = status

    def _update_status(self, **changes: object) -> None:
        with self._status_lock:
            self._status = self._status.evolve(**changes)

    def _run_scan(self, options: ScanOptions, roots: list[Path] | None) -> list[FileRecord]:
        """Reset state, walk, run each enabled pass, and finalize status."""
        self._store.clear()
        self._set_status(ScanStatus.started())

        try:
            self._scan_passes(options, roots)
        except _ScanCancelled:
            count = len(self._store)
            logger.info("Scan cancelled with %d items found", count)
            self._update_status(
                running=False,
                cancelled=True,
                current=f"Scan cancelled: {count} items found",
            )
            return self._store.records()
        except Exception as e:
            logger.exception("Scan failed")
            self._update_status(running=False, current=f"Scan failed: {e}")
            raise

        count = len(self._store)
        logger.info("Scan complete: %d items found", count)
        total = self.status().total
        self._update_status(
            running=False,
            progress=total,
            overall_progress=self.status().overall_total,
            current=f"Scan complete: {count} items found",
        )
        return self._store.records()

    def _scan_passes(self, options: ScanOptions, roots: list[Path] | None) -> None:
        scan_roots = self.resolve_roots(options, roots)
        logger.info("Scanning %d root(s): %s", len(scan_roots), ", ".join(map(str, scan_roots)))

        walker = DirectoryWalker(should_stop=self._cancel.is_set)
        files = walker.walk_all(scan_roots)
        self._check_cancel()

        categories = options.enabled_categories()
        self._update_status(total=len(files), overall_total=len(files) * len(categories))
        logger.debug("Collected %d files, running %d pass(es)", len(files), len(categories))

        for pass_number, category in enumerate(categories):
            classifier = self._classifiers[category]
            offset = pass_number * len(files)
            on_progress = self._progress_reporter(classifier, offset)
            for record in classifier.classify(files, on_progress):
                self._store.add(record)
                self._check_cancel()

    def _progress_reporter(self, classifier: Classifier, offset: int) -> Callable[[int, str], None]:
        """Build the per-file callback for one pass."""

        def report(index: int, path: str) -> None:
            self._check_cancel()
            self._update_status(
                progress=index,
                overall_progress=offset + index,
                current=classifier.progress_message(path),
            )

        return report

    def _check_cancel(self) -> None:
        if self._cancel.is_set():
            raise _ScanCancelled
