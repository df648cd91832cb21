"""Allow running with ``python -m ticket_print_service``."""

from .app import main

if __name__ == '__main__':
    main()
