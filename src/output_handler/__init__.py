"""
Output Handler Module for the Energy Invoice Extraction System.

This module provides functionality for:
    - Excel report generation (records and monthly analysis sheets)
    - JSON dumps of records, analysis and processing summary

Author: ML Engineering Team
"""

from .handler import OutputHandler
from .excel_exporter import ExcelExporter

__all__ = ['OutputHandler', 'ExcelExporter']
