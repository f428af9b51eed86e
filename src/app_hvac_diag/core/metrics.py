"""
MetricValue - explicit present / absent / invalid metric state

Cycle metrics carry their availability with them instead of relying on
None checks or NaN propagation through the arithmetic.

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-02
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class MetricStatus(str, Enum):
    """Availability of a metric."""
    PRESENT = "present"
    ABSENT = "absent"
    INVALID = "invalid"


@dataclass(frozen=True)
class MetricValue:
    """
    A single cycle metric.

    Attributes:
        status: Availability of the value
        value: Numeric value, only set when status is PRESENT
        reason: Why the metric is absent or invalid
    """
    status: MetricStatus
    value: Optional[float] = None
    reason: str = ""

    @property
    def is_present(self) -> bool:
        return self.status is MetricStatus.PRESENT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "value": self.value,
            "reason": self.reason,
        }


def present(value: float) -> MetricValue:
    """Wrap a computed value; non-finite results become INVALID."""
    if not math.isfinite(value):
        return MetricValue(MetricStatus.INVALID, reason=f"non-finite result {value!r}")
    return MetricValue(MetricStatus.PRESENT, float(value))


def absent(reason: str) -> MetricValue:
    return MetricValue(MetricStatus.ABSENT, reason=reason)


def invalid(reason: str) -> MetricValue:
    return MetricValue(MetricStatus.INVALID, reason=reason)


def from_optional(value: Optional[float], field: str) -> MetricValue:
    """Metric for an optional raw reading field."""
    if value is None:
        return absent(f"{field} not measured")
    if not math.isfinite(value):
        return invalid(f"{field} is not a finite number")
    return MetricValue(MetricStatus.PRESENT, float(value))
