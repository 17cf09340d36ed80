"""
Main Output Handler Module.

This module provides the OutputHandler class that coordinates the
report outputs of a batch: the Excel workbook and a JSON dump of the
records.

Author: ML Engineering Team
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from config import get_config
from src.utils.logger import get_logger
from src.utils.helpers import ensure_directory
from src.utils.exceptions import OutputError
from src.extraction.invoice_record import InvoiceRecord
from src.analysis.aggregator import (
    MonthlyAnalysis,
    generate_monthly_analysis,
    generate_processing_summary
)
from .excel_exporter import ExcelExporter

# Initialize module logger
logger = get_logger(__name__)


class OutputHandler:
    """
    Unified output handler for extracted records.

    Attributes:
        excel_enabled: Whether Excel export is enabled
        json_enabled: Whether the JSON dump is enabled
        output_dir: Directory for all outputs
        excel_exporter: ExcelExporter instance (created on first use)

    Example:
        >>> handler = OutputHandler(json_enabled=True)
        >>> info = handler.save(records)
        >>> print(info['excel_path'], info['json_path'])
    """

    def __init__(
        self,
        excel_enabled: Optional[bool] = None,
        json_enabled: Optional[bool] = None,
        output_dir: Optional[str] = None
    ) -> None:
        """
        Initialize the output handler.

        Args:
            excel_enabled: Override config for Excel output.
            json_enabled: Override config for JSON output.
            output_dir: Override the configured output directory.
        """
        self.excel_enabled = excel_enabled if excel_enabled is not None else \
            get_config("output.excel.enabled", True)
        self.json_enabled = json_enabled if json_enabled is not None else \
            get_config("output.json.enabled", False)
        self.output_dir = Path(output_dir or get_config("paths.output_dir", "outputs"))
        self.json_filename = get_config("output.json.filename", "invoice_records.json")

        self._excel_exporter = None

        logger.info(
            f"OutputHandler initialized "
            f"(excel={self.excel_enabled}, json={self.json_enabled})"
        )

    @property
    def excel_exporter(self) -> ExcelExporter:
        """Get or create the Excel exporter."""
        if self._excel_exporter is None:
            self._excel_exporter = ExcelExporter()
        return self._excel_exporter

    def save(
        self,
        records: Sequence[InvoiceRecord],
        excel_filename: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Save records to all enabled outputs.

        A failing output is logged and reported as None so the other
        outputs are still written.

        Returns:
            Dictionary with output details:
            {
                'excel_path': 'outputs/Raport_Facturi_....xlsx',
                'json_path': 'outputs/invoice_records.json',
                'summary': {...}
            }
        """
        records = list(records)
        analysis = generate_monthly_analysis(records)
        output_info = {
            'excel_path': None,
            'json_path': None,
            'summary': generate_processing_summary(records).to_dict()
        }

        if self.excel_enabled:
            try:
                output_info['excel_path'] = self.to_excel(records, analysis, excel_filename)
            except OutputError as e:
                logger.error(f"Excel export failed: {e}")

        if self.json_enabled:
            try:
                output_info['json_path'] = self.export_json(
                    records, self.output_dir / self.json_filename, analysis
                )
            except OutputError as e:
                logger.error(f"JSON export failed: {e}")

        return output_info

    def to_excel(
        self,
        records: Sequence[InvoiceRecord],
        analysis: Optional[List[MonthlyAnalysis]] = None,
        filename: Optional[str] = None
    ) -> str:
        """Export records to the Excel report; returns its path."""
        return self.excel_exporter.export(
            records, analysis, filename, output_dir=str(self.output_dir)
        )

    def export_json(
        self,
        records: Sequence[InvoiceRecord],
        path: Union[str, Path],
        analysis: Optional[List[MonthlyAnalysis]] = None
    ) -> str:
        """
        Dump records, monthly analysis and summary to a JSON file.

        Args:
            records: Records to write.
            path: Target file.
            analysis: Monthly analysis; computed when omitted.

        Returns:
            Path of the written file.

        Raises:
            OutputError: If the file cannot be written.
        """
        records = list(records)
        if analysis is None:
            analysis = generate_monthly_analysis(records)

        payload = {
            'summary': generate_processing_summary(records).to_dict(),
            'records': [record.to_dict() for record in records],
            'monthly_analysis': [item.to_dict() for item in analysis]
        }

        path = Path(path)
        try:
            ensure_directory(path.parent)
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise OutputError(f"Failed to write JSON output {path}: {e}")

        logger.info(f"JSON file saved: {path} ({len(records)} records)")
        return str(path)
