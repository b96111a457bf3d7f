from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from typing import List, Optional, Tuple

from weatherwane.core.app_settings import AppSettings
from .engine import PERIOD_MS, Instant, WeatherListing, from_unix_ms
from .service import WeatherForecastService


NO_SELECTION_MESSAGE = "No zones selected."
NO_MATCH_MESSAGE = "No matching zones found."


@dataclass(frozen=True)
class BoardRow:
    zone: str
    listings: Tuple[WeatherListing, ...]


class ForecastBoard:
    """
    Forecast table for the selected zones.

    Rows are cached and only recomputed once the board is dirty: the weather
    period rolled over (check_for_weather_change) or the selection / count
    changed (set_dirty). Column 0 is always the current period.
    """

    def __init__(self, service: WeatherForecastService, settings: AppSettings):
        self.service = service
        self.settings = settings
        self._last_period: Optional[int] = None
        self._rows: List[BoardRow] = []
        self._dirty = True

    @property
    def dirty(self) -> bool:
        return self._dirty

    def set_dirty(self) -> None:
        self._dirty = True

    def check_for_weather_change(self, now: Optional[Instant] = None) -> bool:
        period = self.service.current_period(now)
        if period != self._last_period:
            self._last_period = period
            self._dirty = True
            return True
        return False

    def rows(self, now: Optional[Instant] = None) -> List[BoardRow]:
        if self._dirty:
            self._dirty = False
            count = self.settings.forecast_count
            selected = self.settings.selected_zones
            self._rows = [
                BoardRow(zone=z.name, listings=self.service.get_forecast(z.territory_id, count + 1, now))
                for z in self.service.all_zones
                if z.territory_id in selected
            ]
        return list(self._rows)

    def time_headers(self, now: Optional[Instant] = None, tz: Optional[tzinfo] = None) -> List[str]:
        sync = self.service.current_period(now)
        headers = ["Now"]
        for i in range(1, self.settings.forecast_count + 1):
            start = from_unix_ms(sync + i * PERIOD_MS).astimezone(tz)
            headers.append(start.strftime("%H:%M"))
        return headers

    def empty_message(self, now: Optional[Instant] = None) -> Optional[str]:
        if not self.settings.selected_zones:
            return NO_SELECTION_MESSAGE
        if not self.rows(now):
            return NO_MATCH_MESSAGE
        return None
