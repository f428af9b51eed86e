"""
Report View - Console rendering of a full diagnostic report

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-05
"""

from app_hvac_diag.modules.cycle.view import CycleView
from app_hvac_diag.modules.diagnostic.view import DiagnosticView
from app_hvac_diag.modules.report.model import DiagnosticReport


class ReportView:
    """Console output of a DiagnosticReport."""

    @staticmethod
    def display_report(report: DiagnosticReport, verbose: bool = True) -> None:
        reading = report.reading
        print("=" * 60)
        title = "SERVICE CHECK"
        if reading.reading_id:
            title += f" - {reading.reading_id}"
        print(title)
        print(f"Generated: {report.generated_at.isoformat()}")
        missing = reading.missing_optional_fields()
        if missing:
            print(f"Not measured: {', '.join(missing)}")
        print()

        CycleView.display_result(report.cycle, verbose=verbose)
        print()
        DiagnosticView.display_result(report.diagnoses, limit=3 if not verbose else None)

    @staticmethod
    def display_summary(report: DiagnosticReport) -> None:
        CycleView.display_summary(report.cycle)
        DiagnosticView.display_summary(report.diagnoses)
