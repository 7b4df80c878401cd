"""
Utilities Package

Helpers used across the application.

- logging.py: configure_logging() and the JSON log formatter
"""
