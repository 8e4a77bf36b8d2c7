#!/usr/bin/env python3
"""
Validation script for reproducible planet generation.

Derives features and synthesizes textures twice for the same record and
reports whether every output matches bit for bit.
"""

import argparse
import sys
from typing import Dict, List, Optional

import numpy as np

from .features import PlanetRecord, derive_features
from .texture_synthesizer import TextureSynthesizer, TEXTURE_KINDS


def check_determinism(
    record: PlanetRecord,
    width: int = 256,
    height: int = 128,
    fallback_temperature: Optional[float] = None
) -> Dict[str, bool]:
    """
    Run the pipeline twice and compare the outputs.

    Returns:
        Mapping of check name -> passed
    """

    features_a = derive_features(record, fallback_temperature=fallback_temperature)
    features_b = derive_features(record, fallback_temperature=fallback_temperature)

    synthesizer = TextureSynthesizer(width=width, height=height)
    buffers_a = synthesizer.synthesize(features_a)
    buffers_b = synthesizer.synthesize(features_b)

    report = {"features": features_a == features_b}
    for kind in TEXTURE_KINDS:
        report[kind] = bool(np.array_equal(getattr(buffers_a, kind), getattr(buffers_b, kind)))
    report["heightfield"] = bool(np.array_equal(buffers_a.heightfield, buffers_b.heightfield))

    return report


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Check that planet generation is deterministic")
    parser.add_argument("--name", default="Kepler-22 b", help="Planet name")
    parser.add_argument("--mass", type=float, help="Mass in Earth masses")
    parser.add_argument("--eqt", type=float, default=262.0, help="Equilibrium temperature (K)")
    parser.add_argument("--width", type=int, default=256, help="Texture width")
    parser.add_argument("--height", type=int, default=128, help="Texture height")
    args = parser.parse_args(argv)

    record = PlanetRecord(pl_name=args.name, pl_masse=args.mass, pl_eqt=args.eqt)

    print(f"Checking determinism for '{record.name}' at {args.width}x{args.height}...")
    report = check_determinism(record, args.width, args.height)

    for check, passed in report.items():
        print(f"  {check}: {'✓ PASS' if passed else '✗ FAIL'}")

    if all(report.values()):
        print("✅ Generation is deterministic")
        return 0

    print("❌ Outputs differ between runs")
    return 1


if __name__ == "__main__":
    sys.exit(main())
