"""
Parameter specification for derived planet features.

This module defines:
- ParameterSpec: Range validation and clamping of numeric parameters
- FEATURE_PARAMETERS: Ranges of the numeric FeatureSet fields
"""

from typing import Dict, List, Tuple


class ParameterSpec:
    """
    Specification for numeric parameters with validation and clamping.

    Each parameter has:
    - min_val: Minimum allowed value
    - max_val: Maximum allowed value
    - default: Value used when the parameter is missing
    """

    def __init__(self, params: Dict[str, Tuple[float, float, float]]):
        """
        Initialize parameter specification.

        Args:
            params: Dict mapping param_name -> (min_val, max_val, default)
        """
        self.params = params

    def validate(self, values: Dict[str, float]) -> bool:
        """Check if all parameters are present and in valid ranges."""
        return not self.violations(values)

    def violations(self, values: Dict[str, float]) -> List[str]:
        """Describe every missing or out-of-range parameter."""

        problems = []
        for param_name, (min_val, max_val, _) in self.params.items():
            if param_name not in values:
                problems.append(f"{param_name}: missing")
                continue

            value = values[param_name]
            if not (min_val <= value <= max_val):
                problems.append(f"{param_name}: {value} outside [{min_val}, {max_val}]")

        return problems

    def clamp(self, values: Dict[str, float]) -> Dict[str, float]:
        """Clamp known parameters to their range, filling defaults for missing ones."""

        result = {}
        for param_name, (min_val, max_val, default) in self.params.items():
            if param_name in values:
                result[param_name] = max(min_val, min(max_val, values[param_name]))
            else:
                result[param_name] = default

        return result

    def get_defaults(self) -> Dict[str, float]:
        """Get the default value of each parameter."""
        return {name: default for name, (_, _, default) in self.params.items()}

    def get_param_ranges(self) -> Dict[str, Tuple[float, float]]:
        """Get parameter ranges (min, max) for each parameter."""
        return {name: (min_val, max_val) for name, (min_val, max_val, _) in self.params.items()}


FEATURE_PARAMETERS = ParameterSpec({
    "landMassPercentage": (0.0, 100.0, 50.0),
    "mountainousness": (0.0, 1.0, 0.65),
    "terrainRoughness": (0.0, 1.0, 0.5),
    "atmosphereDensity": (0.0, 1.0, 0.2),
})
