"""
Queue Bot Configurator
An interactive wizard that writes the queue bot's config.json.

Entry point for the application.
"""

import sys

from configurator.cli import main

if __name__ == "__main__":
    sys.exit(main())
