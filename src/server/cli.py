#!/usr/bin/env python3
"""
Command-line renderer for a single planet.

Writes the colour, displacement and normal maps plus the derived features
and scene parameters of either the planet of a given day or an ad-hoc
record.
"""

import argparse
import datetime
import json
import sys
from pathlib import Path
from typing import List, Optional

from ..catalog import PlanetCatalog, DailyPlanetPicker, CatalogError
from ..engine import (
    PlanetRecord, TextureSynthesizer, TextureAnalyzer,
    derive_features, build_scene
)
from .export import save_textures


def _write_json(path: Path, payload) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for rendering planet textures."""

    parser = argparse.ArgumentParser(description="Render exoplanet textures")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--catalog", type=str, help="Catalog JSON file (picks the planet of --date)")
    source.add_argument("--name", type=str, help="Planet name for an ad-hoc record")
    parser.add_argument("--date", type=str, help="ISO date for catalog mode (default: today)")
    parser.add_argument("--mass", type=float, help="Mass in Earth masses (ad-hoc record)")
    parser.add_argument("--eqt", type=float, help="Equilibrium temperature in K (ad-hoc record)")
    parser.add_argument("--fallback-temperature", type=float,
                        help="Deterministic temperature (K) used when eqt is missing")
    parser.add_argument("--output", type=str, required=True, help="Output directory")
    parser.add_argument("--width", type=int, default=1024, help="Texture width")
    parser.add_argument("--height", type=int, default=512, help="Texture height")
    parser.add_argument("--progress", action="store_true", help="Show synthesis progress")
    parser.add_argument("--analyze", action="store_true", help="Write texture statistics")

    args = parser.parse_args(argv)

    if args.catalog:
        try:
            date = datetime.date.fromisoformat(args.date) if args.date else datetime.date.today()
        except ValueError:
            print(f"Error: Invalid date: {args.date}")
            return 2

        try:
            picker = DailyPlanetPicker(
                PlanetCatalog(args.catalog),
                fallback_temperature=args.fallback_temperature
            )
            daily = picker.pick(date)
        except (CatalogError, OSError, json.JSONDecodeError) as e:
            print(f"Error: {e}")
            return 1

        record, features = daily.record, daily.features
        print(f"Planet of {date.isoformat()}: {record.name} (catalog index {daily.index})")
    else:
        record = PlanetRecord(pl_name=args.name, pl_masse=args.mass, pl_eqt=args.eqt)
        features = derive_features(record, fallback_temperature=args.fallback_temperature)
        print(f"Planet: {record.name}")

    try:
        synthesizer = TextureSynthesizer(
            width=args.width,
            height=args.height,
            show_progress=args.progress
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 2

    buffers = synthesizer.synthesize(features)

    output_dir = Path(args.output)
    paths = save_textures(buffers, output_dir)
    _write_json(output_dir / "features.json", features.to_dict())
    _write_json(output_dir / "scene.json", build_scene(features).to_dict())

    print(f"  Seed: {features.seed}")
    print(f"  Land: {features.land_mass_percentage:.1f}%  Rings: {features.has_rings}")
    for kind, path in paths.items():
        print(f"  {kind}: {path}")

    if args.analyze:
        analysis = TextureAnalyzer().analyze(buffers, features)
        _write_json(output_dir / "analysis.json", analysis)
        landmasses = analysis["landmass_analysis"]
        print(f"  Measured land: {landmasses['measured_land_percentage']:.1f}% "
              f"in {landmasses['landmass_count']} landmasses "
              f"({analysis['surface_classification']})")

    print("✓ Done")
    return 0


if __name__ == "__main__":
    sys.exit(main())
