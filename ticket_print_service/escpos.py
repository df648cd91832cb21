"""
ESC/POS Ticket Encoder
======================

Builds the command stream for a queue ticket on ESC/POS thermal printers
(Epson, Star and compatibles).

The printer keeps its text mode between jobs, so every stream starts with
a full initialize.
"""

from datetime import datetime, timezone, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo

from .config import TICKET_TIMEZONE
from .models import PrintJob

HEADER_TEXT = "SISTEMA DE SENHAS"
CATEGORY_LABEL = "Categoria: "
PRIORITY_TEXT = "*** ATENDIMENTO PRIORITÁRIO ***"
FOOTER_TEXT = "Aguarde ser chamado"

# pt-BR short date/time, e.g. "01/01/2024, 10:00:00"
TIMESTAMP_FORMAT = "%d/%m/%Y, %H:%M:%S"


def _resolve_tz(tz: Union[str, tzinfo, None]) -> tzinfo:
    if tz is None:
        tz = TICKET_TIMEZONE
    if isinstance(tz, str):
        if tz.upper() == 'UTC':
            return timezone.utc
        return ZoneInfo(tz)
    return tz


def format_timestamp(dt: datetime, tz: Union[str, tzinfo, None] = None) -> str:
    """Render an instant the way the ticket shows it."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(_resolve_tz(tz)).strftime(TIMESTAMP_FORMAT)


class TicketEncoder:
    """Encoder for queue tickets."""

    # ESC/POS commands
    INIT = b'\x1b\x40'  # Initialize printer
    CUT = b'\x1d\x56\x00'  # Full cut

    # Text formatting
    BOLD_ON = b'\x1b\x45\x01'
    BOLD_OFF = b'\x1b\x45\x00'
    SIZE_NORMAL = b'\x1d\x21\x00'
    SIZE_DOUBLE = b'\x1d\x21\x11'  # Double width + height
    SIZE_TRIPLE = b'\x1d\x21\x22'  # Triple width + height

    # Alignment
    ALIGN_CENTER = b'\x1b\x61\x01'

    NEWLINE = b'\n'

    def __init__(self, tz: Union[str, tzinfo, None] = None):
        self.tz = _resolve_tz(tz)

    @staticmethod
    def _text(text: str) -> bytes:
        return text.encode('utf-8')

    def _line(self, text: str = '') -> bytes:
        return self._text(text) + self.NEWLINE

    def priority_segment(self) -> bytes:
        """Bold priority banner followed by a blank line."""
        return self.BOLD_ON + self._line(PRIORITY_TEXT) + self.BOLD_OFF + self.NEWLINE

    def encode(self, job: PrintJob) -> bytes:
        """
        Encode a ticket.

        Args:
            job: Ticket to print

        Returns:
            ESC/POS command stream, ending with a paper cut
        """
        data = bytearray()
        data.extend(self.INIT)
        data.extend(self.ALIGN_CENTER)

        # Header
        data.extend(self.BOLD_ON)
        data.extend(self.SIZE_DOUBLE)
        data.extend(self._line(HEADER_TEXT))
        data.extend(self.BOLD_OFF)
        data.extend(self.SIZE_NORMAL)
        data.extend(self.NEWLINE)

        # Category
        data.extend(self._line(CATEGORY_LABEL + job.category_name))
        data.extend(self.NEWLINE)

        # Ticket number (large)
        data.extend(self.BOLD_ON)
        data.extend(self.SIZE_TRIPLE)
        data.extend(self._line(job.ticket_number))
        data.extend(self.SIZE_NORMAL)
        data.extend(self.BOLD_OFF)
        data.extend(self.NEWLINE)

        if job.is_priority:
            data.extend(self.priority_segment())

        data.extend(self._line(format_timestamp(job.timestamp, self.tz)))

        # Footer
        data.extend(self.NEWLINE * 2)
        data.extend(self._line(FOOTER_TEXT))
        data.extend(self.NEWLINE * 3)

        data.extend(self.CUT)
        return bytes(data)


def encode_ticket(job: PrintJob, tz: Optional[Union[str, tzinfo]] = None) -> bytes:
    """Encode a ticket with the configured ticket timezone."""
    return TicketEncoder(tz).encode(job)
