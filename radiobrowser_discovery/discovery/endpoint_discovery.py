"""Resolve -> probe -> select pipeline for the radio-browser API endpoint."""

from __future__ import annotations

import logging
import time
from typing import Sequence

from ..api.stats_client import StatsClient
from ..config import AppConfig
from ..exceptions import ResolutionError
from . import NameResolver, StatsFetcherFactory
from .models import DiscoveryResult
from .prober import ParallelProber
from .resolver import DnsResolver
from .selector import rank, select_best

logger = logging.getLogger(__name__)


class EndpointDiscovery:
    """Finds the radio-browser API server that answers fastest from here.

    Usage:
        discovery = EndpointDiscovery(AppConfig(probe=ProbeConfig(user_agent="myapp/1.0")))
        base_url = discovery.discover()  # None when no server answered

    The resolver and the stats fetcher factory are injectable so tests can
    substitute fakes for DNS and HTTP.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        resolver: NameResolver | None = None,
        fetcher_factory: StatsFetcherFactory = StatsClient,
    ):
        self._config = config or AppConfig()
        self._resolver = resolver or DnsResolver()
        self._fetcher_factory = fetcher_factory

    @property
    def config(self) -> AppConfig:
        return self._config

    def api_urls(self) -> list[str]:
        """Candidate URLs for the configured DNS name. Not all of them need to work.

        Raises ResolutionError if the name cannot be resolved.
        """
        return self._resolver.resolve(self._config.discovery.dns_name)

    def discover_api_urls(self, candidates: Sequence[str]) -> list[DiscoveryResult]:
        """Probe *candidates*; unreachable endpoints are left out."""
        prober = ParallelProber(
            self._config.probe,
            fetcher_factory=self._fetcher_factory,
            max_workers=self._config.pool.max_workers,
        )
        return prober.probe_all(candidates)

    def discover_ranked(self) -> list[DiscoveryResult]:
        """All reachable endpoints, fastest first."""
        start = time.monotonic()
        candidates = self.api_urls()
        ranked = rank(self.discover_api_urls(candidates))
        logger.info(
            "Discovery complete",
            extra={
                "candidates": len(candidates),
                "results": len(ranked),
                "elapsed_seconds": round(time.monotonic() - start, 2),
            },
        )
        return ranked

    def discover(self) -> str | None:
        """Base URL of the best performing endpoint, or None if none answered.

        Raises ResolutionError when the DNS name does not resolve.
        """
        best = select_best(self.discover_ranked())
        if best is None:
            logger.warning("No reachable endpoint for %s", self._config.discovery.dns_name)
        else:
            logger.info("Selected endpoint %s", best, extra={"endpoint": best})
        return best

    def discover_or_default(self, default: str | None = None) -> str:
        """Like discover(), but falls back instead of returning None or raising ResolutionError.

        *default* overrides the configured ``discovery.fallback_url``.
        """
        fallback = default or self._config.discovery.fallback_url
        try:
            best = self.discover()
        except ResolutionError as exc:
            logger.warning("Resolution failed (%s), using fallback %s", exc, fallback)
            return fallback
        if best is None:
            logger.warning("Using fallback %s", fallback, extra={"endpoint": fallback})
            return fallback
        return best
