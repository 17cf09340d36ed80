"""
Pipeline Module for the Energy Invoice Extraction System.

Runs documents through text acquisition and extraction, one at a time
or concurrently.

Author: ML Engineering Team
"""

from .processor import DocumentProcessor, BatchProcessor

__all__ = ['DocumentProcessor', 'BatchProcessor']
