"""
Ticket Print Service Configuration
"""

import os

# =============================================================================
# Server Configuration
# =============================================================================

PORT = int(os.environ.get('TICKET_PRINT_PORT', 5100))
HOST = os.environ.get('TICKET_PRINT_HOST', '0.0.0.0')
DEBUG = os.environ.get('TICKET_PRINT_DEBUG', 'false').lower() == 'true'

# API Key for configuration changes
API_KEY = os.environ.get('TICKET_PRINT_API_KEY', 'ticket-print-2024')

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

# =============================================================================
# CORS
# =============================================================================

CORS_ALLOW_ORIGIN = '*'
CORS_ALLOW_HEADERS = 'authorization, x-client-info, apikey, content-type'

# =============================================================================
# Printer Defaults
# =============================================================================

# Raw (JetDirect) printing port
DEFAULT_PRINTER_PORT = 9100

# Upper bound for a single printer write (seconds)
PRINTER_TIMEOUT = float(os.environ.get('TICKET_PRINT_PRINTER_TIMEOUT', 10))

# Timezone used for the timestamp line on the ticket
TICKET_TIMEZONE = os.environ.get('TICKET_PRINT_TIMEZONE', 'UTC')

# =============================================================================
# Storage Configuration
# =============================================================================

# Settings key holding the printer configuration
PRINTER_CONFIG_KEY = 'printer_config'

# Local file-based settings (used when Supabase is not configured)
DATA_DIR = os.environ.get('TICKET_PRINT_DATA_DIR', os.path.expanduser('~/.ticket_print_service'))

# Hosted settings table (Supabase / PostgREST)
SUPABASE_URL = os.environ.get('SUPABASE_URL', '')
SUPABASE_SERVICE_ROLE_KEY = os.environ.get('SUPABASE_SERVICE_ROLE_KEY', '')
SUPABASE_SETTINGS_TABLE = 'system_settings'
SUPABASE_TIMEOUT = 10  # seconds
