"""
HTTP Transport
==============

Posts the command stream as an octet-stream body to the printer's
listener at ``http://{ip}:{port}``.
"""

import logging
from typing import Dict, Any

import requests

from .base import BaseTransport

logger = logging.getLogger(__name__)


class HTTPTransport(BaseTransport):
    """Single HTTP POST of the raw commands."""

    CONTENT_TYPE = 'application/octet-stream'

    def send(self, data: bytes) -> Dict[str, Any]:
        if not self.printer.ip:
            return {'success': False, 'error': 'Printer host not configured'}

        url = self.printer.url
        logger.info('Sending %d bytes to printer %s', len(data), url)

        try:
            response = requests.post(
                url,
                data=data,
                headers={'Content-Type': self.CONTENT_TYPE},
                timeout=self.printer.timeout,
            )
        except requests.exceptions.Timeout:
            return {'success': False, 'error': f'Connection timeout to {self.target}'}
        except requests.exceptions.ConnectionError:
            return {'success': False, 'error': f'Cannot connect to {self.target}'}
        except requests.exceptions.RequestException as e:
            return {'success': False, 'error': str(e)}

        if not 200 <= response.status_code < 300:
            return {
                'success': False,
                'error': f'Printer responded with HTTP {response.status_code}',
                'status_code': response.status_code,
            }

        return {
            'success': True,
            'url': url,
            'status_code': response.status_code,
            'bytes_sent': len(data),
        }
