"""
Fault Signature Model - Named patterns of cycle metric deviations

Each fault signature lists the metrics that move when the fault is present,
the direction they move in and how much each observation counts. Signatures
are static reference data, validated once when the catalog is built.

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-04
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from app_hvac_diag.core.errors import CatalogConfigurationError

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    """Expected or observed deviation of a metric."""
    LOW = "low"
    HIGH = "high"
    NORMAL = "normal"


@dataclass(frozen=True)
class Indicator:
    """
    One metric-direction-weight rule within a signature.

    Attributes:
        metric: Cycle metric or raw reading field name
        direction: Expected deviation when the fault is present
        weight: Contribution to the signature score (> 0)
        low_limit: Values below are 'low'
        high_limit: Values above are 'high'
        description: Short field description of the symptom
    """
    metric: str
    direction: Direction
    weight: float
    low_limit: float
    high_limit: float
    description: str = ""

    @property
    def tolerance(self) -> Tuple[float, float]:
        return self.low_limit, self.high_limit

    def classify(self, value: float) -> Direction:
        """Observed direction of a value against the tolerance band."""
        if value < self.low_limit:
            return Direction.LOW
        if value > self.high_limit:
            return Direction.HIGH
        return Direction.NORMAL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metric": self.metric,
            "direction": self.direction.value,
            "weight": self.weight,
            "tolerance": [self.low_limit, self.high_limit],
            "description": self.description,
        }


SEVERITY_LABELS = {
    "SL1": "Minor",
    "SL2": "Moderate",
    "SL3": "Serious",
    "SL4": "Critical",
}


@dataclass(frozen=True)
class SeverityBand:
    """[minimum, maximum) interval of a severity level; None is unbounded."""
    level: str
    minimum: Optional[float]
    maximum: Optional[float]

    @property
    def label(self) -> str:
        return SEVERITY_LABELS.get(self.level, self.level)


@dataclass(frozen=True)
class SeverityScale:
    """
    SL1-SL4 severity of a fault from one metric.

    Attributes:
        metric: Metric the bands apply to
        bands: Severity bands, SL1 first
        inverted: True when lower values are more severe
    """
    metric: str
    bands: Tuple[SeverityBand, ...]
    inverted: bool = False

    def threshold(self, band: SeverityBand) -> Optional[float]:
        """Edge at which a band is reached: its minimum, or its maximum when inverted."""
        return band.maximum if self.inverted else band.minimum

    def reached(self, band: SeverityBand, value: float) -> bool:
        edge = self.threshold(band)
        if edge is None:
            return True
        return value < edge if self.inverted else value >= edge

    def level(self, value: float) -> Optional[SeverityBand]:
        """
        Most severe band reached by value, None below SL1.

        Severity grows with the value, or as it falls when inverted. A value
        in a gap between two bands keeps the milder level.
        """
        current = None
        for band in self.bands:
            if not self.reached(band, value):
                break
            current = band
        return current

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metric": self.metric,
            "inverted": self.inverted,
            "bands": [
                {"level": b.level, "min": b.minimum, "max": b.maximum} for b in self.bands
            ],
        }


@dataclass(frozen=True)
class FaultSignature:
    """
    Complete signature of one fault.

    Attributes:
        key: Stable identifier (e.g. 'low_charge')
        name: Display name
        category: Fault family (refrigerant, airflow, metering, compressor, ...)
        indicators: Ordered indicator rules
        description: Effect on the cycle
        actions: Field checks and corrective actions
        severity: Optional SL1-SL4 scale
    """
    key: str
    name: str
    category: str
    indicators: Tuple[Indicator, ...]
    description: str = ""
    actions: Tuple[str, ...] = ()
    severity: Optional[SeverityScale] = None

    @property
    def total_weight(self) -> float:
        return sum(ind.weight for ind in self.indicators)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "name": self.name,
            "category": self.category,
            "indicators": [ind.to_dict() for ind in self.indicators],
            "description": self.description,
            "actions": list(self.actions),
            "severity": self.severity.to_dict() if self.severity else None,
        }


class FaultSignatureCatalog:
    """
    Read-only, ordered collection of fault signatures.

    Configuration problems are reported when the catalog is built, never
    during a diagnostic run.
    """

    def __init__(self, signatures: Iterable[FaultSignature]):
        """
        Raises:
            CatalogConfigurationError: Malformed signature or duplicate key
        """
        by_key: Dict[str, FaultSignature] = {}
        for signature in signatures:
            _validate_signature(signature)
            if signature.key in by_key:
                raise CatalogConfigurationError(f"Duplicate fault signature key: {signature.key}")
            by_key[signature.key] = signature
        self._signatures: Mapping[str, FaultSignature] = MappingProxyType(by_key)
        logger.info("Fault signature catalog loaded: %d signatures", len(by_key))

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> 'FaultSignatureCatalog':
        """
        Build a catalog from structured records.

        Each record holds 'key', 'name', 'category', 'indicators' (mappings
        with 'metric', 'direction', 'weight', 'tolerance') and optionally
        'description', 'actions' and 'severity' ({'metric', 'bands',
        'inverted'}).

        Raises:
            CatalogConfigurationError: If a record is malformed
        """
        return cls(_signature_from_record(record) for record in records)

    def __len__(self) -> int:
        return len(self._signatures)

    def __contains__(self, key: str) -> bool:
        return key in self._signatures

    def all_signatures(self) -> Tuple[FaultSignature, ...]:
        """All signatures in catalog order."""
        return tuple(self._signatures.values())

    def get(self, key: str) -> FaultSignature:
        """
        Raises:
            KeyError: Unknown signature key
        """
        return self._signatures[key]

    def to_records(self) -> List[Dict[str, Any]]:
        return [signature.to_dict() for signature in self._signatures.values()]


def _validate_signature(signature: FaultSignature) -> None:
    if not signature.indicators:
        raise CatalogConfigurationError(f"{signature.key}: signature has no indicators")
    for ind in signature.indicators:
        if not isinstance(ind.direction, Direction):
            raise CatalogConfigurationError(
                f"{signature.key}: unknown direction {ind.direction!r} for {ind.metric}"
            )
        if not math.isfinite(ind.weight) or ind.weight < 0:
            raise CatalogConfigurationError(
                f"{signature.key}: weight of {ind.metric} must be a non-negative number, "
                f"got {ind.weight!r}"
            )
        if ind.low_limit > ind.high_limit:
            raise CatalogConfigurationError(
                f"{signature.key}: tolerance band of {ind.metric} is inverted "
                f"({ind.low_limit:g} > {ind.high_limit:g})"
            )
    if signature.total_weight <= 0:
        raise CatalogConfigurationError(f"{signature.key}: total indicator weight is zero")
    if signature.severity is not None:
        _validate_severity(signature.key, signature.severity)


def _validate_severity(key: str, scale: SeverityScale) -> None:
    """Band edges must move in the scale's direction, SL1 first."""
    if not scale.bands:
        raise CatalogConfigurationError(f"{key}: severity scale has no bands")
    edges = [scale.threshold(band) for band in scale.bands]
    if any(edge is None for edge in edges):
        raise CatalogConfigurationError(
            f"{key}: every severity band needs a "
            f"{'maximum' if scale.inverted else 'minimum'} on this scale"
        )
    for previous, current in zip(edges, edges[1:]):
        ordered = current < previous if scale.inverted else current > previous
        if not ordered:
            raise CatalogConfigurationError(
                f"{key}: severity bands out of order for "
                f"{'an inverted' if scale.inverted else 'a rising'} scale "
                f"({previous:g} -> {current:g})"
            )


def _signature_from_record(record: Mapping[str, Any]) -> FaultSignature:
    key = record.get("key", "?")
    try:
        indicators = []
        for item in record["indicators"]:
            try:
                direction = Direction(item["direction"])
            except ValueError:
                raise CatalogConfigurationError(
                    f"{key}: unknown direction {item['direction']!r} for {item.get('metric')}"
                ) from None
            low_limit, high_limit = item["tolerance"]
            indicators.append(Indicator(
                metric=item["metric"],
                direction=direction,
                weight=float(item["weight"]),
                low_limit=float(low_limit),
                high_limit=float(high_limit),
                description=item.get("description", ""),
            ))

        severity = None
        if record.get("severity"):
            scale = record["severity"]
            severity = SeverityScale(
                metric=scale["metric"],
                bands=tuple(
                    SeverityBand(band["level"], band.get("min"), band.get("max"))
                    for band in scale["bands"]
                ),
                inverted=bool(scale.get("inverted", False)),
            )

        return FaultSignature(
            key=record["key"],
            name=record["name"],
            category=record["category"],
            indicators=tuple(indicators),
            description=record.get("description", ""),
            actions=tuple(record.get("actions", ())),
            severity=severity,
        )
    except (KeyError, TypeError, ValueError) as e:
        if isinstance(e, CatalogConfigurationError):
            raise
        raise CatalogConfigurationError(f"Malformed fault signature record {key!r}: {e}") from e
