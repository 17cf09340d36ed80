"""
Excel Exporter Module.

This module writes the invoice report workbook with openpyxl.

Sheets:
    - Date Facturi: one row per extracted record
    - Raport_Analiza: monthly kWh per site code, with yearly total
      and monthly average

Author: ML Engineering Team
"""

from datetime import date
from pathlib import Path
from typing import List, Optional, Sequence

from config import get_config
from src.utils.logger import get_logger
from src.utils.helpers import ensure_directory, generate_timestamp, safe_filename
from src.utils.exceptions import ExcelExportError
from src.extraction.invoice_record import InvoiceRecord
from src.analysis.aggregator import MonthlyAnalysis, generate_monthly_analysis

# Initialize module logger
logger = get_logger(__name__)


class ExcelExporter:
    """
    Exports invoice records and their monthly analysis to Excel.

    Attributes:
        output_dir: Directory for output files
        invoices_sheet: Title of the record sheet
        analysis_sheet: Title of the monthly analysis sheet
        filename_pattern: Pattern with ``{client}`` and ``{date}`` fields

    Example:
        >>> exporter = ExcelExporter()
        >>> filepath = exporter.export(records)
        >>> print(f"Saved to: {filepath}")
        Saved to: outputs/Raport_Facturi_COMUNA_BANIA_2025-02-24.xlsx
    """

    # (header, record attribute, column width)
    COLUMNS = [
        ('Nume Fișier', 'file_name', 30),
        ('Furnizor', 'supplier', 18),
        ('Nr Factură', 'invoice_number', 20),
        ('Data Emiterii', 'issue_date', 12),
        ('Nume Client', 'client_name', 30),
        ('Nume Locație', 'site_name', 25),
        ('Cod NLC', 'site_code', 12),
        ('Cod POD', 'meter_point_code', 30),
        ('Adresă', 'address', 40),
        ('Data Start', 'start_date', 12),
        ('Data End', 'end_date', 12),
        ('Consum (kWh)', 'consumption_kwh', 12),
        ('Sursa Linie', 'source_label', 25),
        ('Total Plată (RON)', 'total_payment', 15),
        ('Data Procesării', 'processing_date', 15),
        ('Link Document', 'document_link', 30),
        ('Status', 'status', 12),
        ('Observații', 'observations', 40),
    ]

    ANALYSIS_LEADING = [('Cod NLC', 12), ('Denumire Locație', 25)]
    ANALYSIS_TRAILING = [('TOTAL AN', 12), ('Medie Lunară', 12)]
    MONTH_WIDTH = 10

    def __init__(self) -> None:
        """Initialize the Excel exporter with configuration."""
        self.output_dir = Path(get_config("paths.output_dir", "outputs"))
        self.invoices_sheet = get_config("output.excel.invoices_sheet", "Date Facturi")
        self.analysis_sheet = get_config("output.excel.analysis_sheet", "Raport_Analiza")
        self.filename_pattern = get_config(
            "output.excel.filename_pattern",
            "Raport_Facturi_{client}_{date}.xlsx"
        )

        self._check_dependencies()

        logger.debug(f"ExcelExporter initialized (output_dir: {self.output_dir})")

    def _check_dependencies(self) -> None:
        """Check if required libraries are available."""
        try:
            import openpyxl
            self._openpyxl = openpyxl
        except ImportError:
            raise ImportError(
                "openpyxl is required for Excel export. "
                "Install with: pip install openpyxl"
            )

    def export(
        self,
        records: Sequence[InvoiceRecord],
        analysis: Optional[List[MonthlyAnalysis]] = None,
        filename: Optional[str] = None,
        output_dir: Optional[str] = None
    ) -> str:
        """
        Write the report workbook.

        Args:
            records: Records to list on the first sheet.
            analysis: Monthly analysis for the second sheet. Computed
                from the records when omitted.
            filename: Output filename. If None, built from the pattern.
            output_dir: Output directory. If None, uses configured dir.

        Returns:
            Path to the created Excel file.

        Raises:
            ExcelExportError: If there is nothing to export or saving fails.
        """
        records = list(records)
        if not records:
            raise ExcelExportError("No records", "No records to export")

        if analysis is None:
            analysis = generate_monthly_analysis(records)

        out_dir = ensure_directory(output_dir or self.output_dir)
        filepath = out_dir / (filename or self.default_filename(records))

        try:
            workbook = self._openpyxl.Workbook()
            self._create_invoices_sheet(workbook, records)
            self._create_analysis_sheet(workbook, analysis)
            workbook.save(filepath)

        except Exception as e:
            logger.error(f"Excel export failed: {e}")
            raise ExcelExportError(str(filepath), str(e))

        logger.info(
            f"Excel file saved: {filepath} "
            f"({len(records)} records, {len(analysis)} sites)"
        )
        return str(filepath)

    def default_filename(
        self,
        records: Sequence[InvoiceRecord],
        today: Optional[date] = None
    ) -> str:
        """
        Build the report filename from the first named client and the date.

        Example:
            >>> exporter.default_filename(records, date(2025, 2, 24))
            'Raport_Facturi_COMUNA_BANIA_2025-02-24.xlsx'
        """
        client = next((r.client_name for r in records if r.client_name), "Client")
        return self.filename_pattern.format(
            client=safe_filename(client),
            date=today.isoformat() if today else generate_timestamp("%Y-%m-%d")
        )

    def _write_header(self, sheet, headers: List[str], color: str) -> None:
        from openpyxl.styles import Font, PatternFill, Alignment, Border, Side

        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color=color, end_color=color, fill_type="solid")
        header_alignment = Alignment(horizontal="center", vertical="center")
        thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )

        for col, header_name in enumerate(headers, 1):
            cell = sheet.cell(row=1, column=col, value=header_name)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = header_alignment
            cell.border = thin_border

        sheet.freeze_panes = 'A2'

    @staticmethod
    def _set_widths(sheet, widths: List[int]) -> None:
        from openpyxl.utils import get_column_letter

        for col, width in enumerate(widths, 1):
            sheet.column_dimensions[get_column_letter(col)].width = width

    def _create_invoices_sheet(self, workbook, records: List[InvoiceRecord]) -> None:
        """
        Create the record sheet.

        Args:
            workbook: openpyxl Workbook instance.
            records: Records, one per row.
        """
        sheet = workbook.active
        sheet.title = self.invoices_sheet

        self._write_header(sheet, [header for header, _, _ in self.COLUMNS], "4472C4")

        for row_num, record in enumerate(records, 2):
            row = record.to_dict()
            for col, (_, field_name, _) in enumerate(self.COLUMNS, 1):
                sheet.cell(row=row_num, column=col, value=row[field_name])

        self._set_widths(sheet, [width for _, _, width in self.COLUMNS])

    def _create_analysis_sheet(self, workbook, analysis: List[MonthlyAnalysis]) -> None:
        """
        Create the monthly analysis sheet with one column per month.

        Args:
            workbook: openpyxl Workbook instance.
            analysis: Per-site monthly analysis.
        """
        sheet = workbook.create_sheet(title=self.analysis_sheet)

        months = sorted({month for item in analysis for month in item.monthly_data})
        headers = (
            [name for name, _ in self.ANALYSIS_LEADING]
            + months
            + [name for name, _ in self.ANALYSIS_TRAILING]
        )
        self._write_header(sheet, headers, "548235")

        for row_num, item in enumerate(analysis, 2):
            values = (
                [item.site_code, item.site_name]
                + [item.monthly_data.get(month, 0) for month in months]
                + [item.total_year, item.monthly_average]
            )
            for col, value in enumerate(values, 1):
                sheet.cell(row=row_num, column=col, value=value)

        self._set_widths(
            sheet,
            [width for _, width in self.ANALYSIS_LEADING]
            + [self.MONTH_WIDTH] * len(months)
            + [width for _, width in self.ANALYSIS_TRAILING]
        )
