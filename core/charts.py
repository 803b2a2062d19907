"""
Chart Definitions
=================

A ChartChain names a chained performance chart: its ordered steps and
the positional inputs it expects (e.g. OAT, pressure altitude, weight).
Charts are usually built in code from literal tables; they can also be
loaded from JSON documents of the form::

    {
      "name": "accel_stop_dry",
      "description": "...",
      "inputs": ["oat", "pressure_altitude", "weight"],
      "steps": [[{"x": -40, "y": 0, "z": 5100}, ...], [...]]
    }

A chart with N steps takes N + 1 inputs.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .chain import ChainResult, Step, evaluate_chain, run_chain

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class ChartChain:
    """Named chain of chart steps with its input order."""

    name: str
    input_names: Tuple[str, ...]
    steps: Tuple[Step, ...]
    description: str = ""

    def __post_init__(self):
        object.__setattr__(self, "input_names", tuple(self.input_names))
        object.__setattr__(self, "steps", tuple(self.steps))
        if not self.steps:
            raise ValueError(f"Chart '{self.name}' has no steps.")
        if len(self.input_names) != len(self.steps) + 1:
            raise ValueError(
                f"Chart '{self.name}' has {len(self.steps)} steps and needs "
                f"{len(self.steps) + 1} inputs, got {len(self.input_names)}."
            )

    def evaluate(self, *inputs: float) -> Optional[float]:
        """Read the chart for positional inputs in `input_names` order."""
        self._check_arity(inputs)
        return evaluate_chain(self.steps, inputs)

    def evaluate_named(self, **inputs: float) -> Optional[float]:
        """Read the chart for inputs given by name."""
        missing = [n for n in self.input_names if n not in inputs]
        unknown = sorted(set(inputs) - set(self.input_names))
        if missing or unknown:
            raise ValueError(
                f"Chart '{self.name}': missing inputs {missing}, unknown inputs {unknown}."
            )
        return self.evaluate(*(inputs[n] for n in self.input_names))

    def diagnose(self, *inputs: float) -> ChainResult:
        """Full chain outcome, including which step failed."""
        self._check_arity(inputs)
        return run_chain(self.steps, inputs)

    def _check_arity(self, inputs) -> None:
        if len(inputs) != len(self.input_names):
            raise ValueError(
                f"Chart '{self.name}' takes {len(self.input_names)} inputs "
                f"({', '.join(self.input_names)}), got {len(inputs)}."
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChartChain":
        try:
            name = data["name"]
            steps = tuple(
                Step.from_mappings(rows, name=f"{name} step {i + 1}")
                for i, rows in enumerate(data["steps"])
            )
            return cls(
                name=name,
                input_names=tuple(data["inputs"]),
                steps=steps,
                description=data.get("description", ""),
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed chart definition: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputs": list(self.input_names),
            "steps": [[p.to_dict() for p in step.points] for step in self.steps],
        }


def load_chart(path: Path | str) -> ChartChain:
    """Load one chart from a JSON file."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    chart = ChartChain.from_dict(data)
    logger.info(
        "Loaded chart %s (%d steps, %d points) from %s",
        chart.name, len(chart.steps), sum(len(s.points) for s in chart.steps), path.name,
    )
    return chart


def load_charts(directory: Path | str) -> Dict[str, ChartChain]:
    """Load every ``*.json`` chart in a directory, keyed by chart name."""
    charts: Dict[str, ChartChain] = {}
    for path in sorted(Path(directory).glob("*.json")):
        chart = load_chart(path)
        if chart.name in charts:
            raise ValueError(f"Duplicate chart name '{chart.name}' in {path}")
        charts[chart.name] = chart
    return charts


@dataclass
class ChartLibrary:
    """Registry of charts available to the command line and regressions."""

    charts: Dict[str, ChartChain] = field(default_factory=dict)

    def register(self, chart: ChartChain) -> None:
        self.charts[chart.name] = chart

    def get(self, name: str) -> ChartChain:
        if name not in self.charts:
            raise KeyError(f"Unknown chart '{name}'. Known: {', '.join(sorted(self.charts))}")
        return self.charts[name]

    def names(self) -> List[str]:
        return sorted(self.charts)

    @classmethod
    def from_directory(cls, directory: Path | str) -> "ChartLibrary":
        return cls(charts=load_charts(directory))
