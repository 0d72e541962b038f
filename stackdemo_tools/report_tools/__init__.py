"""
Run report utilities.

    from stackdemo_tools.report_tools import ReportManager, Status
"""

from .report_manager import (
    DEFAULT_REPORT_DIR,
    DEFAULT_REPORT_NAME,
    ReportEntry,
    ReportManager,
    ReportTest,
    Status,
    TestResultSummary,
)

__all__ = [
    "ReportManager",
    "ReportTest",
    "ReportEntry",
    "Status",
    "TestResultSummary",
    "DEFAULT_REPORT_DIR",
    "DEFAULT_REPORT_NAME",
]
