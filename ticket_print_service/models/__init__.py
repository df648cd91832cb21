"""
Ticket Print Service Models
"""

from .job import PrintJob, InvalidPrintJob
from .printer import PrinterConfig, InvalidPrinterConfig

__all__ = ['PrintJob', 'InvalidPrintJob', 'PrinterConfig', 'InvalidPrinterConfig']
