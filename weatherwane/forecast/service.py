from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Iterable, List, Mapping, Optional, Sequence, Tuple

from .catalog import RawTerritory, RawWeather, RawWeatherRate, Zone, build_catalog
from .engine import Instant, WeatherListing, forecast, period_start


class WeatherForecastService:
    """Zone catalog plus forecast lookups by territory id.

    Built once; nothing in here is mutated afterwards, so one instance can be
    shared by every view that needs it.
    """

    def __init__(self, zones: Sequence[Zone]):
        self._all_zones: Tuple[Zone, ...] = tuple(zones)
        self._zones: Mapping[int, Zone] = MappingProxyType({z.territory_id: z for z in self._all_zones})

    @classmethod
    def from_rows(
        cls,
        weathers: Iterable[RawWeather],
        rates: Iterable[RawWeatherRate],
        territories: Iterable[RawTerritory],
        log: Optional[Callable[[str], None]] = None,
    ) -> "WeatherForecastService":
        service = cls(build_catalog(weathers, rates, territories))
        if log is not None:
            log(f"[Catalog] {len(service.all_zones)} forecastable zones")
        return service

    @property
    def all_zones(self) -> Tuple[Zone, ...]:
        return self._all_zones

    @property
    def zones(self) -> Mapping[int, Zone]:
        return self._zones

    def get_zone(self, territory_id: int) -> Optional[Zone]:
        return self._zones.get(territory_id)

    def get_forecast(self, territory_id: int, count: int, now: Optional[Instant] = None) -> Tuple[WeatherListing, ...]:
        zone = self._zones.get(territory_id)
        if zone is None or count <= 0:
            return ()
        return forecast(zone, count, now)

    def current_period(self, now: Optional[Instant] = None) -> int:
        return period_start(now)

    def filter_zones(self, text: str) -> List[Zone]:
        needle = (text or "").casefold()
        if not needle:
            return list(self._all_zones)
        return [z for z in self._all_zones if needle in z.name.casefold()]
