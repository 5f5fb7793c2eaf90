from __future__ import annotations

import logging

import pytest

from backend.utils.config import get_settings
from backend.utils.logger import format_fields, get_logger, log_event


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_settings_defaults(monkeypatch):
    for name in ("RANDOM_OCCUPANCY_PROBABILITY", "RANDOM_OCCUPANCY_SEED", "APP_NAME"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.app_name == "Hotel Room Reservation"
    assert settings.random_occupancy_probability == 0.3
    assert settings.random_occupancy_seed is None


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("RANDOM_OCCUPANCY_PROBABILITY", "0.45")
    monkeypatch.setenv("RANDOM_OCCUPANCY_SEED", "99")

    settings = get_settings()

    assert settings.random_occupancy_probability == 0.45
    assert settings.random_occupancy_seed == 99


@pytest.mark.parametrize(
    "name, value",
    [
        ("RANDOM_OCCUPANCY_PROBABILITY", "1.5"),
        ("RANDOM_OCCUPANCY_PROBABILITY", "often"),
        ("RANDOM_OCCUPANCY_SEED", "abc"),
    ],
)
def test_invalid_environment_values_raise(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError):
        get_settings()


def test_format_fields_keeps_insertion_order():
    assert format_fields(rooms=[101, 102], cost=1) == " | rooms=[101, 102] | cost=1"
    assert format_fields() == ""


def test_log_event_emits_structured_record(caplog):
    logger = get_logger("tests.booking")

    with caplog.at_level(logging.INFO, logger="tests.booking"):
        log_event(logger, "Booking committed", count=2, travel_time=1)

    assert caplog.messages == ["Booking committed | count=2 | travel_time=1"]
