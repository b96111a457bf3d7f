from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple, Union

from .catalog import RateTable, WeatherKind, Zone


# ----------------------------
# Eorzea clock
# ----------------------------

EOREA_HOUR_MS = 175_000
PERIOD_MS = 8 * EOREA_HOUR_MS          # one weather window, 8 Eorzea hours
EOREA_HOUR_S = EOREA_HOUR_MS // 1000
EOREA_DAY_S = 24 * EOREA_HOUR_S

PERIOD = timedelta(milliseconds=PERIOD_MS)

_U32 = 0xFFFFFFFF
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

Instant = Union[int, datetime]


@dataclass(frozen=True)
class WeatherListing:
    weather: WeatherKind
    start: datetime
    end: datetime


# ----------------------------
# Helpers
# ----------------------------

def _tdiv(a: int, b: int) -> int:
    # integer division truncating toward zero
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _tmod(a: int, b: int) -> int:
    return a - b * _tdiv(a, b)


def to_unix_ms(when: datetime) -> int:
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return (when - _EPOCH) // timedelta(milliseconds=1)


def from_unix_ms(ms: int) -> datetime:
    return _EPOCH + timedelta(milliseconds=ms)


def now_ms(now: Optional[Instant] = None) -> int:
    if now is None:
        return to_unix_ms(datetime.now(timezone.utc))
    if isinstance(now, datetime):
        return to_unix_ms(now)
    return int(now)


def period_start(now: Optional[Instant] = None) -> int:
    """Start (unix ms) of the weather period containing `now`."""
    ms = now_ms(now)
    return ms - _tmod(ms, PERIOD_MS)


# ----------------------------
# Forecast
# ----------------------------

def calculate_target(unix_ms: int) -> int:
    """Weather roll in [0, 99] for the period starting at `unix_ms`.

    Every step is 32-bit unsigned with wraparound; the result has to agree
    with the game client bit for bit.
    """
    seconds = _tdiv(unix_ms, 1000)
    hour = _tdiv(seconds, EOREA_HOUR_S)
    shifted_hour = ((hour + 8 - _tmod(hour, 8)) & _U32) % 24
    day = _tdiv(seconds, EOREA_DAY_S)

    ret = ((day & _U32) * 100 + shifted_hour) & _U32
    ret = ((ret << 11) ^ ret) & _U32
    ret = (ret >> 8) ^ ret
    ret %= 100
    return ret & 0xFF


def resolve_weather(target: int, rates: RateTable) -> WeatherKind:
    for entry in rates:
        if entry.cumulative_rate > target:
            return entry.weather
    # tables that don't add up to 100
    return rates[-1].weather


def forecast(zone: Zone, count: int, now: Optional[Instant] = None) -> Tuple[WeatherListing, ...]:
    if count <= 0:
        return ()

    sync = period_start(now)
    out: List[WeatherListing] = []
    for i in range(count):
        ts = sync + i * PERIOD_MS
        weather = resolve_weather(calculate_target(ts), zone.rates)
        out.append(WeatherListing(
            weather=weather,
            start=from_unix_ms(ts),
            end=from_unix_ms(ts + PERIOD_MS),
        ))
    return tuple(out)
