"""Shared fixtures for the weather forecast tests."""

import pytest

from weatherwane.forecast.catalog import (
    RateEntry,
    RawTerritory,
    RawWeather,
    RawWeatherRate,
    WeatherKind,
    Zone,
)


def slots(*pairs):
    """Pad (weather_id, rate) pairs out to the fixed 8-slot row."""
    pairs = list(pairs)
    return tuple(pairs + [(0, 0)] * (8 - len(pairs)))


# ---------------------------------------------------------------------------
# Raw provider rows
# ---------------------------------------------------------------------------


@pytest.fixture
def raw_weathers():
    return [
        RawWeather(id=1, name="Clear Skies", icon=60201),
        RawWeather(id=2, name="Fair Skies", icon=60202),
        RawWeather(id=3, name="Clouds", icon=60203),
        RawWeather(id=4, name="Fog", icon=60204),
        RawWeather(id=7, name="Rain", icon=60207),
    ]


@pytest.fixture
def raw_rates():
    return [
        # Limsa-style table, sums to 100
        RawWeatherRate(table_id=14, slots=slots((3, 20), (1, 30), (2, 30), (4, 10), (7, 10))),
        # zero-rate and unknown-weather slots in between
        RawWeatherRate(table_id=7, slots=slots((1, 40), (2, 0), (99, 25), (3, 60))),
        # one usable weather only
        RawWeatherRate(table_id=29, slots=slots((2, 100))),
        # nothing usable
        RawWeatherRate(table_id=30, slots=slots((99, 50), (1, 0))),
    ]


@pytest.fixture
def raw_territories():
    return [
        RawTerritory(territory_id=128, searchable=True, rate_table_id=14, place_name="Limsa Lominsa Upper Decks"),
        RawTerritory(territory_id=130, searchable=True, rate_table_id=7, place_name="Ul'dah - Steps of Nald"),
        RawTerritory(territory_id=129, searchable=True, rate_table_id=14, place_name="Limsa Lominsa Upper Decks"),
        RawTerritory(territory_id=177, searchable=False, rate_table_id=14, place_name="Mizzenmast Inn"),
        RawTerritory(territory_id=250, searchable=True, rate_table_id=29, place_name="Wolves' Den Pier"),
        RawTerritory(territory_id=251, searchable=True, rate_table_id=30, place_name="Nowhere"),
        RawTerritory(territory_id=252, searchable=True, rate_table_id=0, place_name="Unweathered"),
        RawTerritory(territory_id=253, searchable=True, rate_table_id=55, place_name="Missing Table"),
        RawTerritory(territory_id=254, searchable=True, rate_table_id=14, place_name=""),
    ]


# ---------------------------------------------------------------------------
# Built models
# ---------------------------------------------------------------------------


@pytest.fixture
def abc_zone():
    """Three weathers at 30 / 70 / 100 cumulative."""
    a = WeatherKind(id=1, name="A")
    b = WeatherKind(id=2, name="B")
    c = WeatherKind(id=3, name="C")
    return Zone(
        territory_id=1,
        name="ABC",
        rates=(RateEntry(a, 30), RateEntry(b, 70), RateEntry(c, 100)),
    )
