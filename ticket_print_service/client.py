"""
Ticket Print Service Client
===========================

Python SDK for kiosks talking to the Ticket Print Service.

Usage:
    from ticket_print_service.client import TicketPrintClient

    client = TicketPrintClient('http://localhost:5100', api_key='your-key')

    result = client.print_ticket('A001', 'Recepção', category_prefix='A')

    # Nothing printed on the network: print the returned commands here
    if result.get('method') == 'escpos':
        client.print_locally(result, '192.168.1.50')
"""

import base64
from datetime import datetime, timezone
from typing import Dict, Any, Optional

import requests

from .config import DEFAULT_PRINTER_PORT, PRINTER_TIMEOUT
from .models import PrinterConfig
from .transports import SocketTransport


def decode_commands(result: Dict[str, Any]) -> bytes:
    """
    Get the command stream out of an ``escpos`` response.

    Raises:
        ValueError: if the response carries no commands, or the base64
            payload and ``rawCommands`` disagree
    """
    encoded = result.get('commands')
    if not encoded:
        raise ValueError('Response carries no print commands')

    data = base64.b64decode(encoded)
    raw = result.get('rawCommands')
    if raw is not None and bytes(raw) != data:
        raise ValueError('commands and rawCommands do not match')
    return data


class TicketPrintClient:
    """Client for Ticket Print Service."""

    def __init__(self, base_url: str = 'http://localhost:5100', api_key: str = None,
                 timeout: int = 30):
        """
        Initialize client.

        Args:
            base_url: Base URL of the print service
            api_key: API key for configuration changes
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        """Get request headers."""
        headers = {'Content-Type': 'application/json'}
        if self.api_key:
            headers['Authorization'] = f'Bearer {self.api_key}'
        return headers

    def _request(self, method: str, endpoint: str, data: Dict = None) -> Dict[str, Any]:
        """Make API request."""
        url = f'{self.base_url}{endpoint}'

        try:
            if method == 'GET':
                response = requests.get(url, headers=self._headers(), timeout=self.timeout)
            elif method == 'POST':
                response = requests.post(url, json=data, headers=self._headers(), timeout=self.timeout)
            elif method == 'PUT':
                response = requests.put(url, json=data, headers=self._headers(), timeout=self.timeout)
            else:
                raise ValueError(f'Unknown method: {method}')

            result = response.json()

        except requests.exceptions.Timeout:
            return {'success': False, 'error': 'Request timeout'}
        except requests.exceptions.ConnectionError:
            return {'success': False, 'error': f'Cannot connect to {self.base_url}'}
        except requests.exceptions.RequestException as e:
            return {'success': False, 'error': str(e)}
        except ValueError as e:
            return {'success': False, 'error': str(e)}

        # Error responses only carry 'error'
        if isinstance(result, dict):
            result.setdefault('success', response.ok)
        return result

    # =========================================================================
    # Health
    # =========================================================================

    def health(self) -> Dict[str, Any]:
        """Check service health."""
        return self._request('GET', '/health')

    def is_online(self) -> bool:
        """Check if service is online."""
        result = self.health()
        return result.get('status') == 'online'

    # =========================================================================
    # Printing
    # =========================================================================

    def print_ticket(self, ticket_number: str, category_name: str,
                     category_prefix: str = '', is_priority: bool = False,
                     timestamp: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Print a ticket.

        Args:
            ticket_number: Ticket as shown to the customer (e.g. "A001")
            category_name: Service category
            category_prefix: Category prefix
            is_priority: Add the priority banner
            timestamp: Issue time (now when omitted)

        Returns:
            Response dict; ``method`` is ``network`` when printed, ``escpos``
            when the caller must print the returned commands
        """
        if timestamp is None:
            timestamp = datetime.now(timezone.utc)

        data = {
            'ticketNumber': ticket_number,
            'categoryName': category_name,
            'categoryPrefix': category_prefix,
            'isPriority': is_priority,
            'timestamp': timestamp.isoformat(),
        }
        return self._request('POST', '/print-ticket', data)

    def preview(self, ticket: Dict[str, Any]) -> Dict[str, Any]:
        """Encode a ticket request body without printing it."""
        return self._request('POST', '/api/preview', ticket)

    def print_locally(self, result: Dict[str, Any], host: str,
                      port: int = DEFAULT_PRINTER_PORT,
                      timeout: float = PRINTER_TIMEOUT) -> Dict[str, Any]:
        """
        Send the commands of an ``escpos`` response to a printer reachable
        from this machine, over a raw TCP connection.
        """
        if result.get('method') != 'escpos':
            return {'success': False, 'error': 'Response has no commands to print'}

        try:
            data = decode_commands(result)
        except ValueError as e:
            return {'success': False, 'error': str(e)}

        printer = PrinterConfig(enabled=True, ip=host, port=port,
                                transport='socket', timeout=timeout)
        return SocketTransport(printer).send(data)

    # =========================================================================
    # Printer Configuration
    # =========================================================================

    def get_printer_config(self) -> Dict[str, Any]:
        """Get the configured network printer."""
        result = self._request('GET', '/api/printer-config')
        return result.get('printer_config', {})

    def set_printer_config(self, enabled: bool, ip: str = None,
                           port: int = DEFAULT_PRINTER_PORT, **kwargs) -> Dict[str, Any]:
        """
        Replace the network printer configuration.

        Args:
            enabled: Turn network printing on or off
            ip: Printer host
            port: Printer port
            **kwargs: transport ('http' or 'socket'), timeout
        """
        data = {
            'enabled': enabled,
            'ip': ip,
            'port': port,
            **kwargs
        }
        return self._request('PUT', '/api/printer-config', data)
