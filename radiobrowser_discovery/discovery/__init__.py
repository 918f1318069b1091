"""Endpoint discovery package: collaborator Protocols the pipeline depends on."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..config import ProbeConfig
    from .models import ServerStats


@runtime_checkable
class NameResolver(Protocol):
    """Turns a DNS name into candidate base URLs."""

    def resolve(self, name: str) -> list[str]:
        """Return ``https://<host>/`` URLs in resolution order. Raises ResolutionError."""
        ...


@runtime_checkable
class StatsFetcher(Protocol):
    """Performs the single probe round trip against one candidate."""

    def get_server_stats(self) -> ServerStats:
        ...


# (base_url, config) -> fetcher; the default is api.stats_client.StatsClient
StatsFetcherFactory = Callable[[str, "ProbeConfig"], StatsFetcher]
