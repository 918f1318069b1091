"""Data models for probed endpoints and their server statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class ServerStats:
    """Statistics reported by a radio-browser server at ``/json/stats``."""

    supported_version: int = 0
    software_version: str = ""
    status: str = ""
    stations: int = 0
    stations_broken: int = 0
    tags: int = 0
    clicks_last_hour: int = 0
    clicks_last_day: int = 0
    languages: int = 0
    countries: int = 0
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ServerStats:
        """Build from the decoded JSON body; absent or malformed counters become 0."""
        return cls(
            supported_version=_int(data.get("supported_version")),
            software_version=str(data.get("software_version") or ""),
            status=str(data.get("status") or ""),
            stations=_int(data.get("stations")),
            stations_broken=_int(data.get("stations_broken")),
            tags=_int(data.get("tags")),
            clicks_last_hour=_int(data.get("clicks_last_hour")),
            clicks_last_day=_int(data.get("clicks_last_day")),
            languages=_int(data.get("languages")),
            countries=_int(data.get("countries")),
            raw=dict(data),
        )


@dataclass(frozen=True)
class DiscoveryResult:
    """One successfully probed endpoint."""

    endpoint: str
    duration: int  # milliseconds, wall clock of this probe only
    stats: ServerStats
