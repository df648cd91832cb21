"""
Raw Socket Transport
====================

Writes the command stream straight to the printer's TCP port
(JetDirect / port 9100 style), without any HTTP framing.
"""

import socket
from typing import Dict, Any

from .base import BaseTransport


class SocketTransport(BaseTransport):
    """Raw TCP write of the commands."""

    def send(self, data: bytes) -> Dict[str, Any]:
        host, port = self.printer.ip, self.printer.port

        if not host:
            return {'success': False, 'error': 'Printer host not configured'}

        try:
            with socket.create_connection((host, port), timeout=self.printer.timeout) as sock:
                sock.sendall(data)

            return {
                'success': True,
                'host': host,
                'port': port,
                'bytes_sent': len(data),
            }

        except socket.timeout:
            return {'success': False, 'error': f'Connection timeout to {host}:{port}'}
        except ConnectionRefusedError:
            return {'success': False, 'error': f'Connection refused by {host}:{port}'}
        except OSError as e:
            return {'success': False, 'error': str(e)}
