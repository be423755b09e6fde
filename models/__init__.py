"""
Models package for the Mentoring Report Generator
"""

from .report import (
    AcademicMetadata, IngestionResult, ManualEntry, NormalizedRow, ReportDocument,
    METADATA_FIELDS, METADATA_OPTIONS, REPORT_TYPES, TABLE_HEADERS,
)
from .dashboard import DashboardState, INPUT_METHODS
from .session import SessionContext

__all__ = [
    'AcademicMetadata', 'IngestionResult', 'ManualEntry', 'NormalizedRow', 'ReportDocument',
    'METADATA_FIELDS', 'METADATA_OPTIONS', 'REPORT_TYPES', 'TABLE_HEADERS',
    'DashboardState', 'INPUT_METHODS', 'SessionContext',
]
