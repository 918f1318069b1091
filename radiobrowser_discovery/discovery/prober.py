"""Concurrent, deadline-bounded probing of candidate endpoints."""

from __future__ import annotations

import logging
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Sequence

from ..api.stats_client import StatsClient
from ..config import DEFAULT_MAX_WORKERS, ProbeConfig
from . import StatsFetcherFactory
from .models import DiscoveryResult

logger = logging.getLogger(__name__)


class _Probe:
    """Bookkeeping for one submitted candidate."""

    def __init__(self, url: str, index: int, submitted_at: float, timeout: float):
        self.url = url
        self.index = index
        self.deadline = submitted_at + timeout
        self.future: Future | None = None
        # Set by the worker thread when the stats call returns
        self.finished_at: float | None = None


class ParallelProber:
    """Probes every candidate on a bounded thread pool and keeps the responders.

    Each probe gets ``config.timeout`` seconds counted from its submission to
    the pool, whether it is still queued or already running. A probe that
    raises or misses its deadline is logged and left out; its siblings are
    unaffected. ``probe_all`` returns once every probe has either finished or
    expired, so it never blocks much longer than ``config.timeout``.
    """

    def __init__(
        self,
        config: ProbeConfig,
        fetcher_factory: StatsFetcherFactory = StatsClient,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self._config = config
        self._fetcher_factory = fetcher_factory
        self._max_workers = max_workers

    def probe_all(self, candidates: Sequence[str]) -> list[DiscoveryResult]:
        """Return one DiscoveryResult per candidate that answered in time, in candidate order."""
        if not candidates:
            return []

        executor = ThreadPoolExecutor(
            max_workers=min(self._max_workers, len(candidates)),
            thread_name_prefix="probe",
        )
        try:
            probes: list[_Probe] = []
            for index, url in enumerate(candidates):
                probe = _Probe(url, index, time.monotonic(), self._config.timeout)
                probe.future = executor.submit(self._run, probe)
                probes.append(probe)
            results = self._collect(probes)
        finally:
            # Overrunning probes keep their thread until the HTTP timeout fires;
            # their results are discarded. Queued ones never start.
            executor.shutdown(wait=False, cancel_futures=True)

        logger.info(
            "Probed %d candidates, %d reachable",
            len(candidates), len(results),
            extra={"candidates": len(candidates), "results": len(results)},
        )
        return results

    def _run(self, probe: _Probe) -> DiscoveryResult:
        """Worker body: one timed stats round trip."""
        start = time.monotonic()
        logger.debug("Starting check for %s", probe.url)

        fetcher = self._fetcher_factory(probe.url, self._config)
        stats = fetcher.get_server_stats()

        probe.finished_at = time.monotonic()
        duration = max(0, int((probe.finished_at - start) * 1000))
        logger.debug(
            "Finished check for %s, took %d ms", probe.url, duration,
            extra={"endpoint": probe.url, "duration_ms": duration},
        )
        return DiscoveryResult(endpoint=probe.url, duration=duration, stats=stats)

    def _collect(self, probes: list[_Probe]) -> list[DiscoveryResult]:
        pending: dict[Future, _Probe] = {p.future: p for p in probes}
        collected: list[tuple[int, DiscoveryResult]] = []

        while pending:
            now = time.monotonic()
            for future, probe in list(pending.items()):
                if not future.done() and now >= probe.deadline:
                    del pending[future]
                    future.cancel()
                    self._log_timeout(probe.url)

            if not pending:
                break

            wait_for = min(p.deadline for p in pending.values()) - now
            done, _ = wait(list(pending), timeout=max(wait_for, 0.0), return_when=FIRST_COMPLETED)

            for future in done:
                probe = pending.pop(future)
                result = self._outcome(probe, future)
                if result is not None:
                    collected.append((probe.index, result))

        collected.sort(key=lambda item: item[0])
        return [result for _, result in collected]

    def _outcome(self, probe: _Probe, future: Future) -> DiscoveryResult | None:
        """Unwrap a finished probe, or None if it failed or finished past its deadline."""
        if future.cancelled():
            self._log_timeout(probe.url)
            return None

        exc = future.exception()
        if exc is not None:
            logger.warning(
                "Endpoint %s had an exception: %s", probe.url, exc,
                extra={"endpoint": probe.url},
            )
            return None

        if probe.finished_at is not None and probe.finished_at > probe.deadline:
            self._log_timeout(probe.url)
            return None
        return future.result()

    def _log_timeout(self, url: str) -> None:
        logger.warning(
            "Endpoint %s did not answer within %.1fs", url, self._config.timeout,
            extra={"endpoint": url},
        )
