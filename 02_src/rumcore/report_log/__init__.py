"""ReportLog module."""

from .report_log import IReportLog, ReportEntry, ReportLog

__all__ = ["IReportLog", "ReportEntry", "ReportLog"]
