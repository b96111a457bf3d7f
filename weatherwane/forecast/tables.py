from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple
import json

from .catalog import RATE_SLOTS, RawTerritory, RawWeather, RawWeatherRate


WEATHER_FILE = "weather.json"
WEATHER_RATE_FILE = "weather_rate.json"
TERRITORY_FILE = "territory_type.json"


def default_tables_dir() -> Path:
    return Path(__file__).resolve().parent.parent / "data" / "tables"


def load_json_table(path: Path, default: Any, log: Optional[Callable[[str], None]] = None) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except Exception as e:
        if log is not None:
            log(f"[Tables] Could not read {path.name}: {e}")
        return default


def _rows(table: Any, key: str) -> List[Dict[str, Any]]:
    # Accept either {"rows": [...]} / {key: [...]} or a bare list
    if isinstance(table, dict):
        table = table.get(key, table.get("rows", []))
    if not isinstance(table, list):
        return []
    return [r for r in table if isinstance(r, dict)]


# ----------------------------
# Row parsing
# ----------------------------

def parse_weather(row: Dict[str, Any]) -> Optional[RawWeather]:
    try:
        return RawWeather(
            id=int(row["id"]),
            name=str(row.get("name") or ""),
            icon=int(row.get("icon", 0) or 0),
        )
    except (KeyError, TypeError, ValueError):
        return None


def _parse_slots(row: Dict[str, Any]) -> Tuple[Tuple[int, int], ...]:
    """Read the 8 (weather, rate) slots.

    Two layouts are understood: a list of [weather_id, rate] pairs under
    "slots", or parallel "weather" / "rate" columns. Short rows are padded
    with empty slots so slot order never shifts.
    """
    if "slots" in row:
        pairs = [(int(w), int(r)) for w, r in row["slots"]]
    else:
        weathers = list(row.get("weather", []))
        rates = list(row.get("rate", []))
        pairs = [(int(w), int(r)) for w, r in zip(weathers, rates)]
    pairs = pairs[:RATE_SLOTS]
    pairs += [(0, 0)] * (RATE_SLOTS - len(pairs))
    return tuple(pairs)


def parse_weather_rate(row: Dict[str, Any]) -> Optional[RawWeatherRate]:
    try:
        return RawWeatherRate(table_id=int(row["id"]), slots=_parse_slots(row))
    except (KeyError, TypeError, ValueError):
        return None


def parse_territory(row: Dict[str, Any]) -> Optional[RawTerritory]:
    try:
        return RawTerritory(
            territory_id=int(row["id"]),
            searchable=bool(row.get("searchable", False)),
            rate_table_id=int(row.get("weather_rate", 0) or 0),
            place_name=str(row.get("place_name") or ""),
        )
    except (KeyError, TypeError, ValueError):
        return None


# ----------------------------
# Pack
# ----------------------------

@dataclass(frozen=True)
class RawTables:
    weathers: Tuple[RawWeather, ...]
    rates: Tuple[RawWeatherRate, ...]
    territories: Tuple[RawTerritory, ...]


def load_tables(tables_dir: Optional[Path] = None, log: Optional[Callable[[str], None]] = None) -> RawTables:
    tables_dir = Path(tables_dir) if tables_dir is not None else default_tables_dir()

    weather_rows = _rows(load_json_table(tables_dir / WEATHER_FILE, [], log), "weather")
    rate_rows = _rows(load_json_table(tables_dir / WEATHER_RATE_FILE, [], log), "weather_rate")
    territory_rows = _rows(load_json_table(tables_dir / TERRITORY_FILE, [], log), "territory_type")

    weathers = tuple(w for w in map(parse_weather, weather_rows) if w is not None)
    rates = tuple(r for r in map(parse_weather_rate, rate_rows) if r is not None)
    territories = tuple(t for t in map(parse_territory, territory_rows) if t is not None)

    skipped = (len(weather_rows) - len(weathers)) + (len(rate_rows) - len(rates)) + (len(territory_rows) - len(territories))
    if skipped and log is not None:
        log(f"[Tables] Skipped {skipped} malformed rows in {tables_dir}")

    return RawTables(weathers=weathers, rates=rates, territories=territories)
