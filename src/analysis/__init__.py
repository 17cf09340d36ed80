"""
Analysis Module for the Energy Invoice Extraction System.

Aggregates extracted records into monthly consumption per site and a
processing summary by status.

Author: ML Engineering Team
"""

from .aggregator import (
    MonthlyAnalysis,
    ProcessingSummary,
    generate_monthly_analysis,
    generate_processing_summary
)

__all__ = [
    'MonthlyAnalysis',
    'ProcessingSummary',
    'generate_monthly_analysis',
    'generate_processing_summary'
]
