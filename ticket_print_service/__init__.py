"""
Ticket Print Service
====================

Print formatter for queue-management ticket kiosks.

Turns a ticket print request into an ESC/POS command stream for a thermal
receipt printer, sends it to the configured network printer and falls back
to handing the encoded commands back to the caller for local printing.

Usage:
    python -m ticket_print_service

API Endpoints:
    POST /print-ticket           - Encode and deliver a ticket
    POST /api/preview            - Encode a ticket without delivery
    GET  /api/printer-config     - Current printer configuration
    PUT  /api/printer-config     - Update printer configuration
    GET  /health                 - Health check
"""

__version__ = '1.0.0'
__author__ = 'Ticket Print Service Contributors'
