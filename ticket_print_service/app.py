"""
Ticket Print Service - Main Application
=======================================

HTTP front for the ticket encoder and printer delivery.

Run: python -m ticket_print_service
"""

import sys
import base64
import logging
import platform
import socket
from datetime import datetime
from flask import Flask, request, jsonify
from flask_cors import CORS

from . import __version__
from .config import (
    PORT, HOST, DEBUG, API_KEY, DATA_DIR, LOG_LEVEL, TICKET_TIMEZONE,
    CORS_ALLOW_ORIGIN, CORS_ALLOW_HEADERS,
)
from .models import PrintJob, InvalidPrintJob, PrinterConfig, InvalidPrinterConfig
from .escpos import encode_ticket
from .dispatcher import dispatch
from .store import get_settings_store, load_printer_config, save_printer_config, SettingsStoreError

logger = logging.getLogger(__name__)

# =============================================================================
# Application Setup
# =============================================================================

app = Flask(__name__)
CORS(app)

CORS_HEADERS = {
    'Access-Control-Allow-Origin': CORS_ALLOW_ORIGIN,
    'Access-Control-Allow-Headers': CORS_ALLOW_HEADERS,
}

PRINT_TICKET_ROUTES = ('/print-ticket', '/functions/v1/print-ticket')


def _json_response(body, status: int = 200):
    """JSON response carrying the kiosk CORS headers."""
    response = jsonify(body)
    response.status_code = status
    response.headers.update(CORS_HEADERS)
    return response


def _check_api_key():
    """Validate API key from request."""
    data = request.get_json(silent=True) or {}
    auth_header = request.headers.get('Authorization', '')

    # Check body
    if isinstance(data, dict) and data.get('api_key') == API_KEY:
        return True

    # Check header (Bearer token)
    if auth_header.startswith('Bearer ') and auth_header[7:] == API_KEY:
        return True

    return False


def _parse_job():
    """Parse the request body into a PrintJob (raises InvalidPrintJob)."""
    data = request.get_json(force=True, silent=True)
    if data is None:
        raise InvalidPrintJob('Request body must be valid JSON')
    return PrintJob.from_dict(data)


# =============================================================================
# Ticket Printing
# =============================================================================

def print_ticket():
    """Encode a ticket and deliver it, or return the commands for local printing."""
    if request.method == 'OPTIONS':
        response = app.response_class(status=200)
        del response.headers['Content-Type']
        response.headers.update(CORS_HEADERS)
        return response

    try:
        job = _parse_job()
    except InvalidPrintJob as e:
        logger.info('Rejected print request: %s', e)
        return _json_response({'error': str(e)}, 400)

    try:
        logger.info('Generating print commands for ticket %s', job.ticket_number)
        commands = encode_ticket(job)

        printer = load_printer_config(get_settings_store())
        result = dispatch(commands, printer)

        return _json_response(result.to_dict())

    except Exception as e:
        logger.exception('Print function failed')
        return _json_response({'error': str(e) or 'Erro desconhecido'}, 500)


for _rule in PRINT_TICKET_ROUTES:
    app.add_url_rule(_rule, view_func=print_ticket, methods=['POST', 'OPTIONS'])


@app.route('/api/preview', methods=['POST'])
def preview_ticket():
    """Encode a ticket without sending it anywhere."""
    try:
        job = _parse_job()
    except InvalidPrintJob as e:
        return jsonify({'success': False, 'error': str(e)}), 400

    try:
        commands = encode_ticket(job)
    except Exception as e:
        logger.exception('Preview failed')
        return jsonify({'success': False, 'error': str(e) or 'Erro desconhecido'}), 500

    return jsonify({
        'success': True,
        'ticket': job.to_dict(),
        'commands': base64.b64encode(commands).decode('ascii'),
        'rawCommands': list(commands),
        'length': len(commands),
    })


# =============================================================================
# Printer Configuration
# =============================================================================

@app.route('/api/printer-config', methods=['GET'])
def get_printer_config():
    """Current printer configuration (disabled default when unset)."""
    printer = load_printer_config(get_settings_store())
    return jsonify({
        'success': True,
        'printer_config': printer.to_dict(),
        'network_ready': printer.is_network_ready,
    })


@app.route('/api/printer-config', methods=['PUT'])
def update_printer_config():
    """Replace the printer configuration."""
    if not _check_api_key():
        return jsonify({'success': False, 'error': 'Invalid API key'}), 401

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'success': False, 'error': 'Request body required'}), 400

    data = {k: v for k, v in data.items() if k != 'api_key'}
    try:
        printer = PrinterConfig.from_dict(data)
    except InvalidPrinterConfig as e:
        return jsonify({'success': False, 'error': str(e)}), 400

    try:
        save_printer_config(get_settings_store(), printer)
    except SettingsStoreError as e:
        logger.error('Failed to save printer config: %s', e)
        return jsonify({'success': False, 'error': str(e)}), 500

    return jsonify({
        'success': True,
        'printer_config': printer.to_dict(),
        'message': 'Printer configuration saved'
    })


# =============================================================================
# Health & Info Endpoints
# =============================================================================

@app.route('/api', methods=['GET'])
def api_info():
    """API info (JSON)."""
    return jsonify({
        'service': 'Ticket Print Service',
        'version': __version__,
        'status': 'running',
        'endpoints': {
            'health': '/health',
            'print_ticket': '/print-ticket',
            'preview': '/api/preview',
            'printer_config': '/api/printer-config',
        }
    })


@app.route('/health', methods=['GET'])
def health():
    """Health check with system info."""
    return jsonify({
        'status': 'online',
        'version': __version__,
        'hostname': socket.gethostname(),
        'platform': platform.system(),
        'python': sys.version.split()[0],
        'timezone': TICKET_TIMEZONE,
        'timestamp': datetime.now().isoformat(),
    })


# =============================================================================
# Main
# =============================================================================

def main():
    """Run the service."""
    logging.basicConfig(
        level=LOG_LEVEL,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    print("=" * 60)
    print("  Ticket Print Service")
    print("=" * 60)
    print(f"  Version: {__version__}")
    print(f"  Port: {PORT}")
    print(f"  Data: {DATA_DIR}")
    print("=" * 60)
    print("  API Endpoints:")
    print("    POST /print-ticket                    - Print ticket")
    print("    POST /api/preview                     - Encode without printing")
    print("    GET  /api/printer-config              - Printer config")
    print("    PUT  /api/printer-config              - Update printer config")
    print("    GET  /health                          - Health check")
    print("=" * 60)

    app.run(host=HOST, port=PORT, debug=DEBUG)


if __name__ == '__main__':
    main()
