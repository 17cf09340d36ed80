#!/usr/bin/env python3
"""
Energy Invoice Extraction System - Main Entry Point.

Reads Romanian electricity invoices (PDF, scanned images or extracted
text), turns them into one record per site and consumption period, and
writes the Excel report.

Usage:
    Command Line:
        python main.py --input factura.pdf
        python main.py --input ./facturi/ --output ./rapoarte/ --workers 8 --json

    Python:
        from main import run_extraction
        records = run_extraction("facturi/")

Author: ML Engineering Team
Version: 1.0.0
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import ConfigurationManager, get_config
from src.utils.logger import setup_logger_from_config, get_logger, set_level
from src.utils.helpers import collect_files


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Energy Invoice Extraction System",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Process single invoice:
        python main.py --input factura.pdf

    Process directory into a custom report:
        python main.py --input ./facturi/ --output ./rapoarte/raport.xlsx

    JSON only, debug logging:
        python main.py --input ./facturi/ --no-excel --json --debug
        """
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="Input file or directory containing invoices"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output directory, or .xlsx file path (default: paths.output_dir)"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    parser.add_argument(
        "--workers", "-w",
        type=int,
        default=None,
        help="Number of documents processed concurrently (default: processing.max_workers)"
    )

    parser.add_argument(
        "--no-excel",
        action="store_true",
        help="Disable Excel output"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Also write records, monthly analysis and summary as JSON"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors"
    )

    return parser.parse_args(argv)


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Initialize the extraction system with configuration and logging.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Initialized configuration manager.
    """
    if args.config:
        ConfigurationManager.reset()
    config = ConfigurationManager(args.config)

    logger = setup_logger_from_config()

    if args.debug:
        set_level("DEBUG")
    elif args.quiet:
        set_level("WARNING")

    logger.info("=" * 60)
    logger.info("ENERGY INVOICE EXTRACTION SYSTEM")
    logger.info("=" * 60)
    logger.info(f"Version: {config.get('project.version', '1.0.0')}")
    logger.info(f"Input: {args.input}")
    logger.info(f"Output: {args.output or config.get('paths.output_dir')}")

    return config


def resolve_output(output_path: Optional[str]) -> Dict[str, Optional[str]]:
    """
    Split ``--output`` into an output directory and an Excel filename.

    Example:
        >>> resolve_output("rapoarte/ianuarie.xlsx")
        {'output_dir': 'rapoarte', 'excel_filename': 'ianuarie.xlsx'}
    """
    if not output_path:
        return {'output_dir': None, 'excel_filename': None}

    output_p = Path(output_path)
    if output_p.suffix.lower() == '.xlsx':
        return {'output_dir': str(output_p.parent), 'excel_filename': output_p.name}
    return {'output_dir': str(output_p), 'excel_filename': None}


def run_extraction(
    input_path: str,
    output_path: Optional[str] = None,
    workers: Optional[int] = None,
    enable_excel: bool = True,
    enable_json: bool = False
) -> List[Dict[str, Any]]:
    """
    Run the invoice extraction pipeline.

    This is the main programmatic entry point. Configuration and
    logging are expected to be initialized already.

    Args:
        input_path: Path to input file or directory.
        output_path: Output directory or .xlsx path.
        workers: Thread pool size; defaults to processing.max_workers.
        enable_excel: Whether to generate the Excel report.
        enable_json: Whether to write the JSON dump.

    Returns:
        List of extracted record dictionaries.

    Example:
        >>> records = run_extraction("facturi/", "rapoarte/")
        >>> for r in records:
        ...     print(r['site_code'], r['status'])
    """
    logger = get_logger(__name__)

    from src.pipeline import BatchProcessor
    from src.output_handler import OutputHandler

    files = collect_files(input_path, get_config("input.supported_extensions", [".pdf"]))
    if not files:
        logger.warning(f"No supported files found in: {input_path}")
        return []

    logger.info(f"Processing {len(files)} files...")
    records = BatchProcessor(max_workers=workers).process(files)

    output = resolve_output(output_path)
    output_handler = OutputHandler(
        excel_enabled=enable_excel,
        json_enabled=enable_json,
        output_dir=output['output_dir']
    )
    output_info = output_handler.save(records, excel_filename=output['excel_filename'])

    summary = output_info['summary']
    logger.info(
        f"Records: {summary['total_files']} total, {summary['successful_files']} OK, "
        f"{summary['incomplete_files']} incomplete, {summary['error_files']} errors"
    )
    if output_info.get('excel_path'):
        logger.info(f"Excel output: {output_info['excel_path']}")
    if output_info.get('json_path'):
        logger.info(f"JSON output: {output_info['json_path']}")

    return [record.to_dict() for record in records]


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        args = parse_arguments(argv)
        initialize_system(args)
        logger = get_logger(__name__)

        if not Path(args.input).exists():
            print(f"Error: Input path not found: {args.input}", file=sys.stderr)
            return 1

        records = run_extraction(
            input_path=args.input,
            output_path=args.output,
            workers=args.workers,
            enable_excel=not args.no_excel,
            enable_json=args.json
        )

        if not records:
            logger.error("No files to process")
            return 1

        logger.info("=" * 60)
        logger.info(f"Extraction complete. {len(records)} records written.")
        logger.info("=" * 60)

        return 0

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130

    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if "--debug" in sys.argv:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
