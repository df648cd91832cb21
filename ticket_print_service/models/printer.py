"""
Printer Config Model
====================

Network thermal printer settings, as kept in the settings store.
"""

from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any

from ..config import DEFAULT_PRINTER_PORT, PRINTER_TIMEOUT

TRANSPORT_TYPES = ('http', 'socket')


class InvalidPrinterConfig(ValueError):
    """Raised when a stored printer configuration has the wrong shape."""


@dataclass
class PrinterConfig:
    """Printer configuration. Defaults to disabled."""

    enabled: bool = False
    ip: Optional[str] = None
    port: int = DEFAULT_PRINTER_PORT

    # Delivery
    transport: str = "http"  # http, socket
    timeout: float = PRINTER_TIMEOUT

    @classmethod
    def from_dict(cls, data: Any) -> 'PrinterConfig':
        """
        Create from a stored settings value.

        A missing or empty value gives the disabled default.

        Raises:
            InvalidPrinterConfig: if a field has the wrong type or range
        """
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise InvalidPrinterConfig('Printer config must be an object')

        enabled = data.get('enabled', False)
        if enabled is None:
            enabled = False
        if not isinstance(enabled, bool):
            raise InvalidPrinterConfig('enabled must be a boolean')

        ip = data.get('ip') or None
        if ip is not None:
            if not isinstance(ip, str):
                raise InvalidPrinterConfig('ip must be a string')
            ip = ip.strip() or None

        port = data.get('port')
        if port is None:
            port = DEFAULT_PRINTER_PORT
        if isinstance(port, bool) or not isinstance(port, int) or not 0 < port < 65536:
            raise InvalidPrinterConfig('port must be an integer between 1 and 65535')

        transport = data.get('transport') or 'http'
        if transport not in TRANSPORT_TYPES:
            raise InvalidPrinterConfig(f'Invalid transport. Valid: {list(TRANSPORT_TYPES)}')

        timeout = data.get('timeout')
        if timeout is None:
            timeout = PRINTER_TIMEOUT
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise InvalidPrinterConfig('timeout must be a positive number')

        return cls(
            enabled=enabled,
            ip=ip,
            port=port,
            transport=transport,
            timeout=float(timeout),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @property
    def is_network_ready(self) -> bool:
        """Network delivery is enabled and has a target."""
        return self.enabled and bool(self.ip)

    @property
    def url(self) -> str:
        host = self.ip or ''
        # IPv6 literals need brackets in a URL
        if ':' in host and not host.startswith('['):
            host = f'[{host}]'
        return f'http://{host}:{self.port}'
