from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from weatherwane.forecast.service import WeatherForecastService
from weatherwane.forecast.tables import default_tables_dir, load_tables
from .app_settings import AppSettings


@dataclass
class ForecastContext:
    """Shared context handed to whatever displays forecasts.

    Holds the settings store, the log hook and the (lazily built) forecast service.
    """

    settings: AppSettings = field(default_factory=AppSettings)
    log: Callable[[str], None] = print
    tables_dir: Optional[Path] = None

    _service: Optional[WeatherForecastService] = field(default=None, init=False, repr=False)

    @property
    def resolved_tables_dir(self) -> Path:
        if self.tables_dir is not None:
            return Path(self.tables_dir)
        return self.settings.get_tables_dir() or default_tables_dir()

    @property
    def service(self) -> WeatherForecastService:
        if self._service is None:
            self._service = self.build_service()
        return self._service

    def build_service(self) -> WeatherForecastService:
        tables_dir = self.resolved_tables_dir
        raw = load_tables(tables_dir, log=self.log)
        self.log(
            f"[Tables] {tables_dir}: {len(raw.weathers)} weathers, "
            f"{len(raw.rates)} rate tables, {len(raw.territories)} territories"
        )
        return WeatherForecastService.from_rows(raw.weathers, raw.rates, raw.territories, log=self.log)

    def reload(self) -> WeatherForecastService:
        """Drop the cached service and rebuild it from the tables."""
        self._service = None
        return self.service
