"""Chart regression scenarios anchored to stored baselines."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from config import config
from .charts import ChartLibrary

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


@dataclass
class RegressionScenario:
    name: str
    chart: str
    inputs: List[float]
    expected: Optional[float]


@dataclass
class ScenarioResult:
    name: str
    value: Optional[float]
    error: Optional[str] = None


class ChartRegressionRunner:
    """Run deterministic chart readings for CI validation."""

    def __init__(self, library: ChartLibrary | None = None, tolerance: float | None = None):
        self.tolerance = config.regression.tolerance if tolerance is None else tolerance
        self.library = library or ChartLibrary.from_directory(config.regression.chart_dir)

    def load_baseline(self, baseline_path: Path) -> List[RegressionScenario]:
        with open(baseline_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        scenarios: List[RegressionScenario] = []
        for name, entry in data.items():
            for key in ("chart", "inputs", "expected"):
                if key not in entry:
                    raise ValueError(f"Baseline scenario '{name}' is missing '{key}'")
            scenarios.append(
                RegressionScenario(
                    name=name,
                    chart=entry["chart"],
                    inputs=list(entry["inputs"]),
                    expected=entry["expected"],
                )
            )
        return scenarios

    def run(self, scenarios: Iterable[RegressionScenario]) -> List[ScenarioResult]:
        """Evaluate every scenario against its chart."""

        results: List[ScenarioResult] = []
        for scenario in scenarios:
            try:
                chart = self.library.get(scenario.chart)
            except KeyError:
                logger.warning("Scenario %s names unknown chart %s", scenario.name, scenario.chart)
                results.append(
                    ScenarioResult(scenario.name, None, error=f"unknown chart '{scenario.chart}'")
                )
                continue
            results.append(ScenarioResult(scenario.name, chart.evaluate(*scenario.inputs)))
        return results

    def _deviation(self, value: float, reference: float) -> float:
        if reference == 0:
            return abs(value - reference)
        return abs(value - reference) / abs(reference)

    def compare_to_baseline(
        self,
        baseline_path: Path,
        report_dir: Path,
    ) -> Tuple[bool, Dict[str, Optional[float]], List[str]]:
        """Compare chart readings to stored baseline with tolerance."""

        report_dir.mkdir(parents=True, exist_ok=True)
        scenarios = self.load_baseline(baseline_path)
        results = self.run(scenarios)
        current = {res.name: res.value for res in results}
        errors = {res.name: res.error for res in results if res.error}

        failures: List[str] = []
        for scenario in scenarios:
            if scenario.name in errors:
                failures.append(f"{scenario.name}: {errors[scenario.name]}")
                continue

            value = current[scenario.name]
            reference = scenario.expected

            if reference is None:
                if value is not None:
                    failures.append(f"{scenario.name}: expected no result, got {value:.4f}")
                continue

            if value is None:
                failures.append(f"{scenario.name}: no result (expected {reference:.4f})")
                continue

            deviation = self._deviation(value, reference)
            if deviation > self.tolerance:
                failures.append(
                    f"{scenario.name} deviated by {deviation:.2e} (value {value:.4f} vs {reference:.4f})"
                )

        report = {
            "current": current,
            "tolerance": self.tolerance,
            "failures": failures,
            "status": "fail" if failures else "pass",
        }

        json_report = report_dir / "chart_regression_report.json"
        with open(json_report, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2)
        logger.info("Chart regression report written to %s", json_report)

        return (len(failures) == 0, current, failures)
