"""
Cycle View - Display and reporting functionality

Console output of cycle state, metrics and advisories.

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-03
"""

from typing import Optional

from app_hvac_diag.core.metrics import MetricValue
from app_hvac_diag.modules.cycle.model import CycleState

# Display order and units of the metrics
METRIC_UNITS = (
    ("evaporating_temp", "°F"),
    ("condensing_temp", "°F"),
    ("superheat", "°F"),
    ("subcooling", "°F"),
    ("compression_ratio", ":1"),
    ("design_temp_difference", "°F"),
    ("condenser_approach", "°F"),
    ("air_delta_t", "°F"),
    ("discharge_line_temp", "°F"),
    ("estimated_discharge_temp", "°F"),
    ("refrigeration_effect", "BTU/lb"),
    ("compression_work", "BTU/lb"),
    ("heat_of_rejection", "BTU/lb"),
    ("cop", ""),
)


def format_metric(metric: MetricValue, unit: str = "") -> str:
    if metric.is_present:
        return f"{metric.value:.2f} {unit}".rstrip()
    return f"{metric.status.value} ({metric.reason})"


def _fmt(value: Optional[float], spec: str = ".1f") -> str:
    return "-" if value is None else format(value, spec)


class CycleView:
    """
    View component for cycle results.

    Responsible for formatting and displaying cycle results.
    No computation should occur here - only presentation.
    """

    @staticmethod
    def display_result(cycle: CycleState, verbose: bool = True) -> None:
        """
        Display cycle calculation results.

        Args:
            cycle: Calculation results to display
            verbose: If True, show state points
        """
        print("=" * 60)
        print(f"CYCLE RESULTS - {cycle.refrigerant_id}")
        print("=" * 60)

        print(f"\nPressures: suction {cycle.suction_pressure:.1f} psig, "
              f"discharge {cycle.discharge_pressure:.1f} psig")

        print("\nMetrics:")
        for name, unit in METRIC_UNITS:
            print(f"  {name:<26} {format_metric(cycle.metric(name), unit)}")

        if verbose:
            print("\nState Points:")
            for point in cycle.state_points:
                print(f"  {point.label:<22} P={point.pressure:7.1f} psig  "
                      f"T={_fmt(point.temperature):>7} °F  "
                      f"h={_fmt(point.enthalpy, '.2f'):>7} BTU/lb  "
                      f"{point.phase.value}"
                      + (f" (x={point.quality:.3f})" if point.quality is not None else ""))

        print("\nAdvisories:")
        if not cycle.advisories:
            print("  ✓ OK")
        for advisory in cycle.advisories:
            print(f"  ⚠️  [{advisory.level.upper()}] {advisory.message}")

        print("=" * 60)

    @staticmethod
    def display_summary(cycle: CycleState) -> None:
        """
        Display compact summary of results.

        Args:
            cycle: Calculation results to summarize
        """
        print(f"Cycle: Te={cycle.evaporating_temp:.1f}°F, Tc={cycle.condensing_temp:.1f}°F, "
              f"SH={_fmt(cycle.superheat.value)}, SC={_fmt(cycle.subcooling.value)}, "
              f"CR={cycle.compression_ratio:.2f}", end="")

        if cycle.advisories:
            print(f" [WARNINGS: {', '.join(a.code for a in cycle.advisories)}]")
        else:
            print()
