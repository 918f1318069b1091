"""Latency ranking of probe results."""

from __future__ import annotations

from typing import Iterable

from .models import DiscoveryResult


def rank(results: Iterable[DiscoveryResult]) -> list[DiscoveryResult]:
    """Sort by duration ascending; equal durations keep their input order."""
    return sorted(results, key=lambda r: r.duration)


def select_best(results: Iterable[DiscoveryResult]) -> str | None:
    """Return the endpoint of the fastest result, or None when there are none."""
    ranked = rank(results)
    if not ranked:
        return None
    return ranked[0].endpoint
