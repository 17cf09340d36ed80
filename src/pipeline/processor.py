"""
Document Pipeline Module.

This module ties text acquisition to the extraction engine:

    DocumentProcessor: one file -> its InvoiceRecords
    BatchProcessor: many files over a thread pool, records concatenated
        in submission order

Acquisition failures never abort a batch: each becomes one ERROR record
carrying the failure reason.

Usage:
    from src.pipeline import BatchProcessor

    records = BatchProcessor(max_workers=4).process(files)

Author: ML Engineering Team
"""

import concurrent.futures
from pathlib import Path
from typing import Iterable, List, Optional, Union

from config import get_config
from src.utils.logger import get_logger
from src.extraction.invoice_record import InvoiceRecord
from src.extraction.parser import InvoiceParser

# Initialize module logger
logger = get_logger(__name__)


class DocumentProcessor:
    """
    Turns one document file into InvoiceRecords.

    Attributes:
        input_handler: Object with ``load(path) -> InputResult``
        parser: InvoiceParser used on the acquired text

    Example:
        >>> processor = DocumentProcessor()
        >>> records = processor.process("facturi/ppc_ianuarie.pdf")
        >>> [r.site_code for r in records]
        ['541393231', '541393231', '541393232']
    """

    def __init__(self, input_handler=None, parser: Optional[InvoiceParser] = None) -> None:
        if input_handler is None:
            from src.input_handler import InputHandler
            input_handler = InputHandler()

        self.input_handler = input_handler
        self.parser = parser or InvoiceParser()

    def process(self, filepath: Union[str, Path]) -> List[InvoiceRecord]:
        """
        Acquire the text of a file and parse it.

        Never raises; failures come back as a single ERROR record.

        Args:
            filepath: Path of the document.

        Returns:
            Records of the document; ``document_link`` is the file path.
        """
        filepath = str(filepath)
        file_name = Path(filepath).name

        try:
            result = self.input_handler.load(filepath)
        except Exception as e:
            logger.exception(f"Text acquisition raised for {file_name}")
            return [self.parser.assembler.error_record(
                file_name, f"text acquisition failed: {e}", document_link=filepath
            )]

        if not result.success:
            logger.warning(f"Skipping extraction for {file_name}: {result.error}")
            return [self.parser.assembler.error_record(
                file_name, result.error or "text acquisition failed", document_link=filepath
            )]

        records = self.parser.parse(result.text, file_name, document_link=filepath)
        logger.info(f"{file_name}: {len(records)} record(s)")
        return records


class BatchProcessor:
    """
    Processes documents concurrently, one task per document.

    Attributes:
        max_workers: Thread pool size
        document_processor: DocumentProcessor shared by all tasks

    Example:
        >>> batch = BatchProcessor(max_workers=2)
        >>> records = batch.process(["a.pdf", "b.pdf"])
    """

    def __init__(
        self,
        max_workers: Optional[int] = None,
        document_processor: Optional[DocumentProcessor] = None
    ) -> None:
        self.max_workers = max(1, int(max_workers or get_config("processing.max_workers", 4)))
        self.document_processor = document_processor or DocumentProcessor()

    def process(self, files: Iterable[Union[str, Path]]) -> List[InvoiceRecord]:
        """
        Process all files and concatenate their records.

        Args:
            files: Document paths.

        Returns:
            Records grouped per document, documents in submission order.
        """
        files = list(files)
        if not files:
            return []

        workers = min(self.max_workers, len(files))
        logger.info(f"Processing {len(files)} document(s) with {workers} worker(s)")

        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(self.document_processor.process, f) for f in files]
            records = [record for future in futures for record in future.result()]

        logger.info(f"Batch complete: {len(records)} record(s) from {len(files)} document(s)")
        return records
