"""
Daily exoplanet selection.

Today's planet is the catalog entry at index (day_of_year - 1) modulo the
catalog size, so the sequence repeats once the catalog is exhausted.
"""

import datetime
import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import List, Optional

from ..engine.features import FeatureSet, PlanetRecord, derive_features
from .store import CatalogEmptyError, PlanetCatalog

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 32


def day_of_year(date: datetime.date) -> int:
    """1-based ordinal day within the year."""
    return date.timetuple().tm_yday


def planet_index_for_date(date: datetime.date, total: int) -> int:
    if total <= 0:
        raise CatalogEmptyError("No exoplanets found in the catalog")
    return (day_of_year(date) - 1) % total


@dataclass(frozen=True)
class DailyPlanet:
    date: datetime.date
    index: int
    record: PlanetRecord
    features: FeatureSet


class DailyPlanetPicker:
    """
    Picks and caches the planet of the day.

    Features are computed once per date and kept for the `cache_size` most
    recently requested dates, so a record without an equilibrium temperature
    keeps the same look while its date stays cached. Safe to share between
    threads.
    """

    def __init__(
        self,
        catalog: PlanetCatalog,
        fallback_temperature: Optional[float] = None,
        cache_size: int = DEFAULT_CACHE_SIZE
    ):
        if cache_size <= 0:
            raise ValueError(f"cache_size must be positive, got {cache_size}")

        self.catalog = catalog
        self.fallback_temperature = fallback_temperature
        self.cache_size = cache_size
        self._cache: "OrderedDict[str, DailyPlanet]" = OrderedDict()
        self._lock = threading.Lock()

    def pick(self, date: Optional[datetime.date] = None) -> DailyPlanet:
        date = date or datetime.date.today()
        key = date.isoformat()

        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
                return self._cache[key]

            index = planet_index_for_date(date, self.catalog.count())
            record = self.catalog.get_by_index(index)
            logger.info("Planet index for %s (day %d): %d -> %s",
                        key, day_of_year(date), index, record.name)

            daily = DailyPlanet(
                date=date,
                index=index,
                record=record,
                features=derive_features(record, fallback_temperature=self.fallback_temperature)
            )
            self._cache[key] = daily
            while len(self._cache) > self.cache_size:
                self._cache.popitem(last=False)
            return daily

    def cached_dates(self) -> List[str]:
        """ISO dates currently cached, least recently used first."""
        with self._lock:
            return list(self._cache)

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()
