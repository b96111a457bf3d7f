from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Set, Tuple


# ----------------------------
# Data models
# ----------------------------

@dataclass(frozen=True)
class WeatherKind:
    id: int
    name: str
    icon: int = 0


@dataclass(frozen=True)
class RateEntry:
    weather: WeatherKind
    cumulative_rate: int


RateTable = Tuple[RateEntry, ...]


@dataclass(frozen=True)
class Zone:
    """A forecastable territory.

    `rates` is ordered by slot, so cumulative_rate never decreases along it.
    """
    territory_id: int
    name: str
    rates: RateTable


# Raw rows as handed over by a data provider (see tables.py)

@dataclass(frozen=True)
class RawWeather:
    id: int
    name: str
    icon: int = 0


@dataclass(frozen=True)
class RawWeatherRate:
    table_id: int
    slots: Tuple[Tuple[int, int], ...]  # 8 x (weather_id, rate)


@dataclass(frozen=True)
class RawTerritory:
    territory_id: int
    searchable: bool
    rate_table_id: int
    place_name: str


RATE_SLOTS = 8


# ----------------------------
# Helpers
# ----------------------------

def _byte(x: int) -> int:
    return x & 0xFF


def ordinal_key(name: str) -> bytes:
    """Sort key matching ordinal (UTF-16 code unit) string comparison."""
    return name.encode("utf-16-be", errors="surrogatepass")


def build_weather_index(weathers: Iterable[RawWeather]) -> Dict[int, WeatherKind]:
    index: Dict[int, WeatherKind] = {}
    for w in weathers:
        index[w.id] = WeatherKind(id=w.id, name=w.name, icon=w.icon)
    return index


def build_rate_table(row: RawWeatherRate, weathers: Dict[int, WeatherKind]) -> RateTable:
    entries: List[RateEntry] = []
    cumulative = 0
    for weather_id, rate in row.slots[:RATE_SLOTS]:
        if rate <= 0:
            continue
        weather = weathers.get(weather_id)
        if weather is None:
            continue
        # the source column is a byte; keep its wraparound
        cumulative = _byte(cumulative + rate)
        entries.append(RateEntry(weather=weather, cumulative_rate=cumulative))
    return tuple(entries)


def build_rate_tables(rates: Iterable[RawWeatherRate], weathers: Dict[int, WeatherKind]) -> Dict[int, RateTable]:
    tables: Dict[int, RateTable] = {}
    for row in rates:
        table = build_rate_table(row, weathers)
        if table:
            tables[_byte(row.table_id)] = table
    return tables


# ----------------------------
# Catalog
# ----------------------------

def build_catalog(
    weathers: Iterable[RawWeather],
    rates: Iterable[RawWeatherRate],
    territories: Iterable[RawTerritory],
) -> Tuple[Zone, ...]:
    """Turn raw provider rows into the ordered zone catalog.

    Rows that don't resolve (unknown weather, missing rate table, unnamed or
    duplicate places, single-weather zones) are dropped without complaint.
    """
    weather_index = build_weather_index(weathers)
    rate_tables = build_rate_tables(rates, weather_index)

    zones: List[Zone] = []
    seen_names: Set[str] = set()

    for tt in territories:
        if not tt.searchable or tt.rate_table_id == 0:
            continue

        table = rate_tables.get(_byte(tt.rate_table_id))
        if table is None or len(table) <= 1:
            continue

        name = tt.place_name or ""
        if not name or name in seen_names:
            continue
        seen_names.add(name)

        zones.append(Zone(territory_id=tt.territory_id, name=name, rates=table))

    zones.sort(key=lambda z: ordinal_key(z.name))
    return tuple(zones)
