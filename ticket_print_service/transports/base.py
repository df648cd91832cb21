"""
Base Transport
==============

Abstract base class for printer transports.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any
from ..models import PrinterConfig


class BaseTransport(ABC):
    """Abstract base class for printer transports."""

    def __init__(self, printer: PrinterConfig):
        """Initialize transport with printer configuration."""
        self.printer = printer

    @property
    def target(self) -> str:
        return f'{self.printer.ip}:{self.printer.port}'

    @abstractmethod
    def send(self, data: bytes) -> Dict[str, Any]:
        """
        Send a command stream to the printer.

        Args:
            data: Encoded ESC/POS bytes

        Returns:
            Dict with success status and details. Network errors are
            reported here, not raised.
        """
        pass
