"""
Feature derivation for exoplanet records.

Turns a catalog record (name, mass, equilibrium temperature, ...) into the
compact, seed-anchored parameter set that drives texture synthesis and the
renderer.
"""

import logging
import random
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, List, Optional

from ..procgen import SeededNoise2D, stable_hash, shift_color, is_hex_color
from ..procgen.parameters import FEATURE_PARAMETERS

logger = logging.getLogger(__name__)

LAND_COLOR_SHIFT = 20
MAX_FALLBACK_TEMPERATURE = 300
FULL_LAND_TEMPERATURE = 373
WARM_ATMOSPHERE_TEMPERATURE = 300
COOL_ATMOSPHERE_COLOR = "#a6c8ff"
WARM_ATMOSPHERE_COLOR = "#ffec98"
RING_NOISE_THRESHOLD = 0.8


@dataclass(frozen=True)
class TemperatureBand:
    name: str
    upper_bound: float  # exclusive, Kelvin
    base_color: str
    water_color: str


TEMPERATURE_BANDS = (
    TemperatureBand("cold", 200.0, "#a3c7d6", "#1e3b70"),
    TemperatureBand("temperate", 350.0, "#4f7942", "#0077be"),
    TemperatureBand("hot", float("inf"), "#8b4513", "#d2691e"),
)


def temperature_band(temp_k: float) -> TemperatureBand:
    """Pick the colour band for an equilibrium temperature in Kelvin."""
    for band in TEMPERATURE_BANDS:
        if temp_k < band.upper_bound:
            return band
    return TEMPERATURE_BANDS[-1]


@dataclass(frozen=True)
class PlanetRecord:
    """
    One row of the exoplanet catalog.

    Field names follow the NASA Exoplanet Archive `pscomppars` columns.
    Only `pl_name`, `pl_masse` and `pl_eqt` feed generation; the rest are
    carried through for display.
    """

    pl_name: str
    hostname: Optional[str] = None
    pl_letter: Optional[str] = None
    hd_name: Optional[str] = None
    hip_name: Optional[str] = None
    tic_id: Optional[str] = None
    gaia_id: Optional[str] = None
    discoverymethod: Optional[str] = None
    disc_year: Optional[int] = None
    disc_locale: Optional[str] = None
    disc_facility: Optional[str] = None
    disc_telescope: Optional[str] = None
    disc_instrument: Optional[str] = None
    pl_masse: Optional[float] = None  # Earth masses
    pl_eqt: Optional[float] = None  # Kelvin
    pl_rade: Optional[float] = None  # Earth radii
    pl_orbper: Optional[float] = None  # days
    pl_orbeccen: Optional[float] = None
    st_spectype: Optional[str] = None

    @property
    def name(self) -> str:
        return self.pl_name

    @property
    def mass(self) -> Optional[float]:
        return self.pl_masse

    @property
    def eqt(self) -> Optional[float]:
        return self.pl_eqt

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlanetRecord":
        """Build a record from a catalog row, ignoring unknown columns."""
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        values["pl_name"] = values.get("pl_name") or ""
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class FeatureSet:
    """Deterministic visual parameters of one planet."""

    land_mass_percentage: float
    mountainousness: float
    terrain_roughness: float
    base_color: str
    land_color: str
    water_color: str
    atmosphere_color: str
    atmosphere_density: float
    has_rings: bool
    seed: int

    _KEYS = {
        "land_mass_percentage": "landMassPercentage",
        "mountainousness": "mountainousness",
        "terrain_roughness": "terrainRoughness",
        "base_color": "baseColor",
        "land_color": "landColor",
        "water_color": "waterColor",
        "atmosphere_color": "atmosphereColor",
        "atmosphere_density": "atmosphereDensity",
        "has_rings": "hasRings",
        "seed": "seed",
    }

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys the renderer expects."""
        return {camel: getattr(self, attr) for attr, camel in self._KEYS.items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeatureSet":
        return cls(**{attr: data[camel] for attr, camel in cls._KEYS.items()})

    def validate(self) -> List[str]:
        """
        List range violations.

        Returns an empty list for a well-formed feature set. Note that very
        cold planets legitimately produce a negative land percentage.
        """

        problems = FEATURE_PARAMETERS.violations(self.to_dict())
        for attr in ("base_color", "land_color", "water_color", "atmosphere_color"):
            value = getattr(self, attr)
            if not is_hex_color(value):
                problems.append(f"{self._KEYS[attr]}: {value!r} is not #rrggbb")
        if self.seed < 0:
            problems.append(f"seed: {self.seed} is negative")
        return problems


def _fallback_temperature(
    record: PlanetRecord,
    fallback_temperature: Optional[float],
    rng: Optional[random.Random]
) -> float:
    if fallback_temperature is not None:
        return fallback_temperature

    rng = rng or random.Random()
    temp_k = rng.randint(0, MAX_FALLBACK_TEMPERATURE)
    logger.warning(
        "No equilibrium temperature for %r; using random fallback %dK "
        "(features will not be reproducible)", record.name, temp_k
    )
    return temp_k


def derive_features(
    record: PlanetRecord,
    fallback_temperature: Optional[float] = None,
    rng: Optional[random.Random] = None
) -> FeatureSet:
    """
    Derive the visual feature set of a planet.

    Args:
        record: Catalog record; only name, mass and eqt are read
        fallback_temperature: Temperature (K) used when eqt is missing.
            When omitted, a random value in [0, 300] is drawn instead.
        rng: Random source for that draw

    Returns:
        FeatureSet; identical for identical (name, mass, eqt) when eqt is
        present or a fallback temperature is given
    """

    seed = stable_hash(record.name)
    noise = SeededNoise2D(seed)

    # A mass of 0 counts as unknown
    if record.mass:
        mass_ratio = min(max(record.mass / 10, 0.0), 1.0)
    else:
        mass_ratio = 0.5
    mountainousness = 1 - 0.7 * mass_ratio

    if record.eqt:
        temp_k = record.eqt
    else:
        temp_k = _fallback_temperature(record, fallback_temperature, rng)

    band = temperature_band(temp_k)

    # Unclamped below zero for very cold planets
    if temp_k > FULL_LAND_TEMPERATURE:
        land_mass_percentage = 100.0
    else:
        land_mass_percentage = min(30 + (temp_k - 260) / 2, 100.0)

    atmosphere_density = 0.2 + 0.8 * noise.sample(1, 1)
    atmosphere_density = min(max(atmosphere_density, 0.0), 1.0)

    features = FeatureSet(
        land_mass_percentage=float(land_mass_percentage),
        mountainousness=float(mountainousness),
        terrain_roughness=0.5,
        base_color=band.base_color,
        land_color=shift_color(band.base_color, LAND_COLOR_SHIFT),
        water_color=band.water_color,
        atmosphere_color=(
            COOL_ATMOSPHERE_COLOR if temp_k < WARM_ATMOSPHERE_TEMPERATURE
            else WARM_ATMOSPHERE_COLOR
        ),
        atmosphere_density=float(atmosphere_density),
        has_rings=noise.sample(2, 2) > RING_NOISE_THRESHOLD,
        seed=seed,
    )

    logger.debug("Derived features for %r: %s", record.name, features)
    return features
