"""Analytics hook tests."""

from __future__ import annotations

import logging

import pytest

from parlayvig import analytics


@pytest.fixture(autouse=True)
def _reset_sinks():
    analytics.clear_sinks()
    yield
    analytics.clear_sinks()


def test_track_event_forwards_to_sinks(caplog) -> None:
    received: list[tuple[str, dict]] = []
    analytics.register_sink(lambda name, props: received.append((name, props)))
    with caplog.at_level(logging.INFO, logger="parlayvig.analytics"):
        analytics.track_event("slip_copied", legs=2)
    assert received == [("slip_copied", {"legs": 2})]
    assert "slip_copied" in caplog.text


def test_failing_sink_is_logged_not_raised(caplog) -> None:
    def broken(name: str, props: dict) -> None:
        raise RuntimeError("sink down")

    received: list[str] = []
    analytics.register_sink(broken)
    analytics.register_sink(lambda name, props: received.append(name))
    with caplog.at_level(logging.ERROR, logger="parlayvig.analytics"):
        analytics.track_event("slip_downloaded")
    assert received == ["slip_downloaded"]
    assert "sink down" in caplog.text
