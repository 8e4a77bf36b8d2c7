"""
Exoplanet catalog and daily selection.
"""

from .store import PlanetCatalog, CatalogError, CatalogEmptyError, PlanetNotFoundError
from .daily import DailyPlanet, DailyPlanetPicker, day_of_year, planet_index_for_date

__all__ = [
    "PlanetCatalog", "CatalogError", "CatalogEmptyError", "PlanetNotFoundError",
    "DailyPlanet", "DailyPlanetPicker", "day_of_year", "planet_index_for_date",
]
