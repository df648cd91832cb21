"""
Delivery Dispatcher
===================

Sends an encoded ticket to the network printer when one is configured and
otherwise hands the commands back for local printing.

Falling back is the normal outcome when no printer is reachable, so it is
returned as a ``DeliveryResult`` rather than raised.
"""

import base64
import logging
from dataclasses import dataclass
from typing import Optional, Dict, Any, List

from .models import PrinterConfig
from .transports import get_transport

logger = logging.getLogger(__name__)

METHOD_NETWORK = 'network'
METHOD_ESCPOS = 'escpos'

NETWORK_MESSAGE = 'Ticket impresso com sucesso'
FALLBACK_MESSAGE = 'Comandos de impressão gerados'


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of a delivery attempt."""

    method: str  # network, escpos
    message: str
    commands: Optional[bytes] = None  # Only for escpos
    error: Optional[str] = None  # Why network delivery was skipped or failed

    @property
    def delivered(self) -> bool:
        return self.method == METHOD_NETWORK

    @property
    def commands_base64(self) -> Optional[str]:
        if self.commands is None:
            return None
        return base64.b64encode(self.commands).decode('ascii')

    @property
    def raw_commands(self) -> Optional[List[int]]:
        if self.commands is None:
            return None
        return list(self.commands)

    def to_dict(self) -> Dict[str, Any]:
        """Success envelope for the HTTP response."""
        data = {
            'success': True,
            'message': self.message,
            'method': self.method,
        }
        if self.commands is not None:
            data['commands'] = self.commands_base64
            data['rawCommands'] = self.raw_commands
        return data


def _attempt_network(commands: bytes, printer: PrinterConfig) -> Dict[str, Any]:
    if not printer.is_network_ready:
        return {'success': False, 'error': 'Network printer not configured'}

    transport_class = get_transport(printer.transport)
    if not transport_class:
        return {'success': False, 'error': f'Unknown transport: {printer.transport}'}

    try:
        return transport_class(printer).send(commands)
    except Exception as e:
        return {'success': False, 'error': str(e)}


def dispatch(commands: bytes, printer: PrinterConfig) -> DeliveryResult:
    """
    Deliver a command stream.

    Makes at most one network attempt. Any failure falls back to returning
    the same bytes with method ``escpos``.

    Args:
        commands: Encoded ticket
        printer: Printer configuration for this request

    Returns:
        DeliveryResult
    """
    result = _attempt_network(commands, printer)

    if result.get('success'):
        logger.info('Ticket delivered to %s via %s', printer.url, printer.transport)
        return DeliveryResult(method=METHOD_NETWORK, message=NETWORK_MESSAGE)

    error = result.get('error', 'Print failed')
    if printer.is_network_ready:
        logger.warning('Network printing to %s failed: %s', printer.url, error)
    else:
        logger.debug('Skipping network printing: %s', error)

    return DeliveryResult(
        method=METHOD_ESCPOS,
        message=FALLBACK_MESSAGE,
        commands=commands,
        error=error,
    )
