"""Tests for discovery models."""

import dataclasses

import pytest

from radiobrowser_discovery.discovery.models import DiscoveryResult, ServerStats

STATS_PAYLOAD = {
    "supported_version": 1,
    "software_version": "0.7.24",
    "status": "OK",
    "stations": 51234,
    "stations_broken": 812,
    "tags": 10020,
    "clicks_last_hour": 4300,
    "clicks_last_day": 98000,
    "languages": 500,
    "countries": 230,
}


class TestServerStats:
    def test_from_dict(self):
        stats = ServerStats.from_dict(STATS_PAYLOAD)
        assert stats.supported_version == 1
        assert stats.software_version == "0.7.24"
        assert stats.status == "OK"
        assert stats.stations == 51234
        assert stats.countries == 230
        assert stats.raw == STATS_PAYLOAD

    def test_missing_and_malformed_fields_default(self):
        stats = ServerStats.from_dict({"stations": "not-a-number", "status": None})
        assert stats.stations == 0
        assert stats.status == ""
        assert stats.software_version == ""

    def test_numeric_strings_are_parsed(self):
        assert ServerStats.from_dict({"stations": "42"}).stations == 42

    def test_raw_is_not_compared(self):
        a = ServerStats.from_dict({**STATS_PAYLOAD, "extra": 1})
        b = ServerStats.from_dict(STATS_PAYLOAD)
        assert a == b


class TestDiscoveryResult:
    def test_is_immutable(self):
        result = DiscoveryResult(endpoint="https://a.example/", duration=12, stats=ServerStats())
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.duration = 1  # type: ignore[misc]
