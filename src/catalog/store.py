"""
File-backed exoplanet catalog.

Keeps catalog rows in insertion order (the order defines the daily index)
and stores them as a JSON array or as JSON lines.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from ..engine.features import PlanetRecord

logger = logging.getLogger(__name__)


class CatalogError(RuntimeError):
    """Base class for catalog failures."""


class CatalogEmptyError(CatalogError):
    """Raised when a lookup needs at least one planet."""


class PlanetNotFoundError(CatalogError):
    """Raised for unknown names or out-of-range indices."""


class PlanetCatalog:
    """
    Ordered collection of PlanetRecords, unique by planet name.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else None
        self._records: List[PlanetRecord] = []
        self._index: Dict[str, int] = {}

        if self.path is not None and self.path.exists():
            self.load(self.path)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PlanetRecord]:
        return iter(self._records)

    def count(self) -> int:
        return len(self._records)

    def insert_many(self, records: Iterable[Union[PlanetRecord, Dict[str, Any]]]) -> int:
        """
        Append records, skipping names already present.

        Returns:
            Number of records actually inserted
        """

        inserted = 0
        for record in records:
            if isinstance(record, dict):
                record = PlanetRecord.from_dict(record)
            if not record.name:
                logger.warning("Skipping catalog row without a planet name")
                continue
            if record.name in self._index:
                continue
            self._index[record.name] = len(self._records)
            self._records.append(record)
            inserted += 1
        return inserted

    def get_by_index(self, index: int) -> PlanetRecord:
        if not 0 <= index < len(self._records):
            raise PlanetNotFoundError(f"No exoplanet found for index {index}")
        return self._records[index]

    def find(self, name: str) -> PlanetRecord:
        if name not in self._index:
            raise PlanetNotFoundError(f"No exoplanet named {name!r}")
        return self._records[self._index[name]]

    def load(self, path: Union[str, Path]) -> int:
        """Load rows from a JSON array or JSON-lines file."""

        path = Path(path)
        text = path.read_text(encoding="utf-8")

        stripped = text.lstrip()
        if stripped.startswith("["):
            rows = json.loads(text)
        else:
            rows = [json.loads(line) for line in text.splitlines() if line.strip()]

        inserted = self.insert_many(rows)
        logger.info("Loaded %d exoplanets from %s", inserted, path)
        return inserted

    def save(self, path: Optional[Union[str, Path]] = None) -> Path:
        """Write the catalog as a JSON array."""

        target = Path(path) if path is not None else self.path
        if target is None:
            raise CatalogError("No catalog path configured")

        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            json.dump([record.to_dict() for record in self._records], f, indent=2)

        return target
