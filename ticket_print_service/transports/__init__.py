"""
Ticket Print Service Transports
===============================

Ways of getting a command stream to a network printer.
"""

from .base import BaseTransport
from .http import HTTPTransport
from .raw import SocketTransport

__all__ = ['BaseTransport', 'HTTPTransport', 'SocketTransport']

# Transport registry
TRANSPORTS = {
    'http': HTTPTransport,
    'socket': SocketTransport,
}


def get_transport(transport_type: str) -> type:
    """Get transport class by type."""
    return TRANSPORTS.get(transport_type)
