import os

# Tickets render in UTC under test
os.environ.setdefault("TICKET_PRINT_TIMEZONE", "UTC")
