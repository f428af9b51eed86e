"""
Diagnostic Model - Rank fault signatures against a computed cycle

Every indicator of every signature is scored against the observed metric:

    match          expected direction observed            +weight
    contradict     opposite direction, or any deviation   -weight
                   when 'normal' was expected
    neutral        deviation expected, metric in band       0 (counted)
    indeterminate  metric absent or invalid                 0 (excluded)

Confidence is the raw score over the weight of the non-indeterminate
indicators, clamped to [0, 1], so signatures are not penalized for
measurements that were never taken.

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-05
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from app_hvac_diag.core.metrics import MetricValue, absent, from_optional
from app_hvac_diag.core.readings import FieldReading
from app_hvac_diag.modules.cycle.model import CycleState
from app_hvac_diag.modules.fault_signatures.model import (
    Direction,
    FaultSignature,
    FaultSignatureCatalog,
    Indicator,
)


class IndicatorOutcome(str, Enum):
    MATCH = "match"
    CONTRADICT = "contradict"
    NEUTRAL = "neutral"
    INDETERMINATE = "indeterminate"


@dataclass(frozen=True)
class Evidence:
    """
    Scored observation of one indicator.

    Attributes:
        metric: Metric name
        expected: Direction the signature expects
        observed: Direction observed against the tolerance band
        value: Observed value
        weight: Indicator weight
        outcome: Scoring outcome
        description: Symptom description from the signature
    """
    metric: str
    expected: Direction
    observed: Direction
    value: float
    weight: float
    outcome: IndicatorOutcome
    description: str = ""

    @property
    def contribution(self) -> float:
        if self.outcome is IndicatorOutcome.MATCH:
            return self.weight
        if self.outcome is IndicatorOutcome.CONTRADICT:
            return -self.weight
        return 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metric": self.metric,
            "expected": self.expected.value,
            "observed": self.observed.value,
            "value": self.value,
            "weight": self.weight,
            "outcome": self.outcome.value,
            "description": self.description,
        }


@dataclass(frozen=True)
class Diagnosis:
    """
    One ranked fault hypothesis.

    Attributes:
        signature_key: Key of the fault signature
        name: Display name
        category: Fault family
        confidence: Normalized score in [0, 1]
        raw_score: Sum of indicator contributions
        available_weight: Weight of the non-indeterminate indicators
        matched: Evidence supporting the fault
        mismatched: Contradicting and neutral evidence
        rationale: Text built from the matched indicators
        severity: SL1-SL4 level when the severity metric is available
        actions: Field checks for the fault
        indeterminate: Indicator metrics that could not be evaluated
    """
    signature_key: str
    name: str
    category: str
    confidence: float
    raw_score: float
    available_weight: float
    matched: Tuple[Evidence, ...]
    mismatched: Tuple[Evidence, ...]
    rationale: str
    severity: Optional[str] = None
    actions: Tuple[str, ...] = ()
    indeterminate: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "signature_key": self.signature_key,
            "name": self.name,
            "category": self.category,
            "confidence": self.confidence,
            "raw_score": self.raw_score,
            "available_weight": self.available_weight,
            "matched": [e.to_dict() for e in self.matched],
            "mismatched": [e.to_dict() for e in self.mismatched],
            "rationale": self.rationale,
            "severity": self.severity,
            "actions": list(self.actions),
            "indeterminate": list(self.indeterminate),
        }


def rank(diagnoses: Iterable[Diagnosis]) -> List[Diagnosis]:
    """Descending confidence, ties broken by signature name."""
    return sorted(diagnoses, key=lambda d: (-d.confidence, d.name))


def resolve_metric(name: str, cycle: CycleState, reading: FieldReading) -> MetricValue:
    """Cycle metric by name, falling back to the raw reading field."""
    if name in cycle.metrics:
        return cycle.metrics[name]
    if hasattr(reading, name):
        return from_optional(getattr(reading, name), name)
    return absent(f"no metric named {name!r}")


def score_indicator(indicator: Indicator, value: float) -> Evidence:
    observed = indicator.classify(value)
    if observed is indicator.direction:
        outcome = IndicatorOutcome.MATCH
    elif indicator.direction is Direction.NORMAL or observed is not Direction.NORMAL:
        outcome = IndicatorOutcome.CONTRADICT
    else:
        outcome = IndicatorOutcome.NEUTRAL
    return Evidence(
        metric=indicator.metric,
        expected=indicator.direction,
        observed=observed,
        value=value,
        weight=indicator.weight,
        outcome=outcome,
        description=indicator.description,
    )


class DiagnosticModel:
    """
    Weighted indicator matching over a fault signature catalog.

    Raises nothing for data-quality issues: missing metrics only shrink the
    evidence a signature is judged on.
    """

    def __init__(self, signatures: FaultSignatureCatalog):
        self.signatures = signatures

    def diagnose(self, cycle: CycleState, reading: FieldReading) -> Tuple[Diagnosis, ...]:
        """
        Rank every signature with at least one evaluable indicator.

        Args:
            cycle: Computed cycle state
            reading: Raw reading the cycle was computed from

        Returns:
            Diagnoses by descending confidence, ties by name
        """
        diagnoses = []
        for signature in self.signatures.all_signatures():
            diagnosis = self.evaluate(signature, cycle, reading)
            if diagnosis is not None:
                diagnoses.append(diagnosis)
        return tuple(rank(diagnoses))

    def evaluate(self, signature: FaultSignature, cycle: CycleState,
                 reading: FieldReading) -> Optional[Diagnosis]:
        """Score one signature; None when no indicator can be evaluated."""
        evidence: List[Evidence] = []
        indeterminate: List[str] = []

        for indicator in signature.indicators:
            metric = resolve_metric(indicator.metric, cycle, reading)
            if not metric.is_present:
                indeterminate.append(indicator.metric)
                continue
            evidence.append(score_indicator(indicator, metric.value))

        if not evidence:
            return None

        raw_score = sum(e.contribution for e in evidence)
        available_weight = sum(e.weight for e in evidence)
        confidence = 0.0
        if available_weight > 0:
            confidence = min(1.0, max(0.0, raw_score / available_weight))

        matched = tuple(e for e in evidence if e.outcome is IndicatorOutcome.MATCH)
        mismatched = tuple(e for e in evidence if e.outcome is not IndicatorOutcome.MATCH)

        return Diagnosis(
            signature_key=signature.key,
            name=signature.name,
            category=signature.category,
            confidence=confidence,
            raw_score=raw_score,
            available_weight=available_weight,
            matched=matched,
            mismatched=mismatched,
            rationale=_rationale(matched, len(evidence), len(signature.indicators)),
            severity=self._severity(signature, cycle, reading),
            actions=signature.actions,
            indeterminate=tuple(indeterminate),
        )

    @staticmethod
    def _severity(signature: FaultSignature, cycle: CycleState,
                  reading: FieldReading) -> Optional[str]:
        if signature.severity is None:
            return None
        metric = resolve_metric(signature.severity.metric, cycle, reading)
        if not metric.is_present:
            return None
        band = signature.severity.level(metric.value)
        return band.level if band else None


def _rationale(matched: Tuple[Evidence, ...], evaluated: int, total: int) -> str:
    if matched:
        text = "; ".join(
            f"{e.description or e.metric} ({e.metric} {e.value:.1f}, {e.observed.value})"
            for e in matched
        )
    else:
        text = "No indicator matched"
    if evaluated < total:
        text += f" [{evaluated} of {total} indicators evaluated]"
    return text
