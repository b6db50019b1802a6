"""
Report Use Cases
"""

from .monthly_report_use_case import MonthlyReportUseCase, month_window
from .dtos import MonthlyReportResponse, MonthlyReportRow

__all__ = [
    "MonthlyReportUseCase",
    "MonthlyReportResponse",
    "MonthlyReportRow",
    "month_window",
]
