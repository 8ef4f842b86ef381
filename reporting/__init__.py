"""
Reporting module for the Asset Intelligence Workbench.

Generates printable market report PDFs from a MarketReport.

Usage:
    from reporting import generate_report

    result = generate_report(report)
    print(result.path)
"""

from .pdf_generator import MarketReportGenerator, ReportSuccess, generate_report

__all__ = [
    "MarketReportGenerator",
    "ReportSuccess",
    "generate_report",
]
