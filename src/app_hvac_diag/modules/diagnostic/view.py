"""
Diagnostic View - Console output of ranked diagnoses

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-05
"""

from typing import Optional, Sequence

from app_hvac_diag.modules.diagnostic.model import Diagnosis


class DiagnosticView:
    """
    View component for diagnoses.

    No computation should occur here - only presentation.
    """

    @staticmethod
    def display_result(diagnoses: Sequence[Diagnosis], limit: Optional[int] = 3,
                       show_actions: bool = True) -> None:
        """
        Display ranked diagnoses.

        Args:
            diagnoses: Ranked diagnoses
            limit: Number of diagnoses to show in detail, None for all
            show_actions: If True, list field actions of each shown diagnosis
        """
        print("=" * 60)
        print("DIAGNOSIS")
        print("=" * 60)

        if not diagnoses:
            print("\n  No fault signature could be evaluated")
            print("=" * 60)
            return

        shown = diagnoses if limit is None else diagnoses[:limit]
        for i, d in enumerate(shown, start=1):
            severity = f" [{d.severity}]" if d.severity else ""
            print(f"\n{i}. {d.name} - {d.confidence * 100:.0f} %{severity}")
            print(f"   {d.rationale}")
            for e in d.mismatched:
                print(f"   ✗ {e.metric} {e.value:.1f}: expected {e.expected.value}, "
                      f"observed {e.observed.value} ({e.outcome.value})")
            if show_actions and d.confidence > 0:
                for action in d.actions:
                    print(f"   - {action}")

        rest = diagnoses[len(shown):]
        if rest:
            print("\nOther candidates: " + ", ".join(
                f"{d.name} {d.confidence * 100:.0f} %" for d in rest
            ))
        print("=" * 60)

    @staticmethod
    def display_summary(diagnoses: Sequence[Diagnosis]) -> None:
        if not diagnoses:
            print("Diagnosis: no evidence")
            return
        top = diagnoses[0]
        print(f"Diagnosis: {top.name} ({top.confidence * 100:.0f} %)")
