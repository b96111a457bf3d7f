from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Set

from PySide6.QtCore import QSettings


DEFAULT_FORECAST_COUNT = 4
MIN_FORECAST_COUNT = 3
MAX_FORECAST_COUNT = 16


def _clamp(x: int, a: int, b: int) -> int:
    return max(a, min(b, x))


@dataclass
class AppSettings:
    """Thin wrapper around QSettings for Weatherwane prefs.

    Pass `path` to keep everything in an INI file instead of the platform store.
    """

    org: str = "Weatherwane"
    app: str = "Weatherwane"
    path: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.path is not None:
            self._qs = QSettings(str(self.path), QSettings.Format.IniFormat)
        else:
            self._qs = QSettings(self.org, self.app)

    def sync(self) -> None:
        self._qs.sync()

    # ---------- zones ----------

    @property
    def selected_zones(self) -> Set[int]:
        v = self._qs.value("selected_zones", "")
        if isinstance(v, (list, tuple)):
            parts = [str(p) for p in v]
        else:
            parts = str(v or "").split(",")
        out: Set[int] = set()
        for p in parts:
            p = p.strip()
            if p.isdigit():
                out.add(int(p))
        return out

    @selected_zones.setter
    def selected_zones(self, zone_ids: Iterable[int]) -> None:
        self._qs.setValue("selected_zones", ",".join(str(z) for z in sorted(set(zone_ids))))

    def toggle_zone(self, territory_id: int, selected: bool) -> None:
        zones = self.selected_zones
        if selected:
            zones.add(territory_id)
        else:
            zones.discard(territory_id)
        self.selected_zones = zones

    def select_all(self, zone_ids: Iterable[int]) -> None:
        self.selected_zones = self.selected_zones | set(zone_ids)

    def clear_selection(self) -> None:
        self.selected_zones = set()

    # ---------- forecast ----------

    @property
    def forecast_count(self) -> int:
        v = self._qs.value("forecast_count", DEFAULT_FORECAST_COUNT)
        try:
            n = int(v)
        except (TypeError, ValueError):
            return DEFAULT_FORECAST_COUNT
        return _clamp(n, MIN_FORECAST_COUNT, MAX_FORECAST_COUNT)

    @forecast_count.setter
    def forecast_count(self, n: int) -> None:
        self._qs.setValue("forecast_count", _clamp(int(n), MIN_FORECAST_COUNT, MAX_FORECAST_COUNT))

    # ---------- data ----------

    def get_tables_dir(self) -> Optional[Path]:
        v = self._qs.value("tables_dir", "")
        v = str(v) if v is not None else ""
        v = v.strip()
        return Path(v) if v else None

    def set_tables_dir(self, path: Optional[Path]) -> None:
        self._qs.setValue("tables_dir", str(Path(path)) if path else "")
