"""
Nomograph Engine: Single Source of Truth (SSOT)
===============================================

This configuration file defines the tunable constants of the chart
interpolation engine. Strategy names, rounding precision and regression
tolerances are read from here; never hard-code them elsewhere.

The production locator is the bracketing heuristic. The exhaustive
"smallest" strategy exists for cross-checks only and changes numeric
outputs against the digitized chart tables.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List


PROJECT_ROOT = Path(__file__).resolve().parents[1]


@dataclass
class LocatorParams:
    """Triangle location strategy."""

    strategy: str = "bracket"             # "bracket" (production) or "smallest"
    min_points: int = 3                   # Smallest dataset a step may hold


@dataclass
class WindParams:
    """Headwind/crosswind decomposition."""

    rounding_decimals: int = 2            # Components rounded before deriving flags
    label_from_right: str = "from right"
    label_from_left: str = "from left"


@dataclass
class RegressionParams:
    """Chart regression scenarios and baselines."""

    tolerance: float = 1e-6               # Relative (absolute when expected is 0)
    chart_dir: Path = field(default_factory=lambda: PROJECT_ROOT / "tests" / "snapshots" / "charts")
    baseline_path: Path = field(
        default_factory=lambda: PROJECT_ROOT / "tests" / "snapshots" / "chart_baseline.json"
    )
    report_dir: Path = field(default_factory=lambda: PROJECT_ROOT / "output" / "reports")


@dataclass
class EngineConfig:
    """
    Master configuration singleton.

    ALL downstream modules import this. Changes here propagate through:
    - Chain evaluation (locator strategy)
    - Wind component rounding and labels
    - Chart regression checks
    """

    locator: LocatorParams = field(default_factory=LocatorParams)
    wind: WindParams = field(default_factory=WindParams)
    regression: RegressionParams = field(default_factory=RegressionParams)

    log_level: str = "WARNING"

    # Project metadata
    project_name: str = "Nomograph Performance Engine"
    version: str = "0.1.0"

    def validate(self) -> List[str]:
        """Validate configuration before evaluating charts."""
        errors = []

        if self.locator.strategy not in ("bracket", "smallest"):
            errors.append(
                f"Unknown locator strategy '{self.locator.strategy}'. "
                "Use 'bracket' or 'smallest'."
            )
        elif self.locator.strategy != "bracket":
            errors.append(
                "ACCURACY WARNING: Non-production locator selected. Results will "
                "not match the digitized chart references."
            )

        if self.locator.min_points < 3:
            errors.append(
                f"Locator needs at least 3 points per step, got {self.locator.min_points}."
            )

        if self.wind.rounding_decimals < 0:
            errors.append("Wind rounding precision cannot be negative.")

        if self.regression.tolerance < 0:
            errors.append("Regression tolerance cannot be negative.")

        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Invalid log level '{self.log_level}'.")

        return errors

    def summary(self) -> str:
        """Generate human-readable configuration summary."""
        return f"""
{self.project_name} Configuration Summary
{'=' * (len(self.project_name) + 22)}
Version: {self.version}

LOCATOR
-------
Strategy: {self.locator.strategy}
Min Points per Step: {self.locator.min_points}

WIND
----
Rounding: {self.wind.rounding_decimals} decimals

REGRESSION
----------
Tolerance: {self.regression.tolerance:g}
Charts: {self.regression.chart_dir}
Baseline: {self.regression.baseline_path}
"""


# Singleton instance - import this throughout the project
config = EngineConfig()

# Validate on import
_errors = config.validate()
if _errors:
    import warnings
    for err in _errors:
        warnings.warn(err, UserWarning)
