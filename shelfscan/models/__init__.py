"""Pydantic models for supplier configuration and extraction results."""

from shelfscan.models.results import (
    ExtractionOutcome,
    ExtractionRun,
    FetchResult,
    ProductRecord,
    RunStatus,
)
from shelfscan.models.schedule import Schedule
from shelfscan.models.supplier import SupplierConfig

__all__ = [
    'SupplierConfig',
    'Schedule',
    'FetchResult',
    'ProductRecord',
    'ExtractionOutcome',
    'ExtractionRun',
    'RunStatus',
]
