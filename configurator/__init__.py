"""
Queue Bot Configurator: interactive setup for the queue bot's config file.
"""

__version__ = "0.1.0"
