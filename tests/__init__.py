"""
Test package for the Blink Actions server

This package contains:
- Unit tests for metadata resolution, config decoding and amount handling
- Transaction builder and encoder tests
- Integration tests for storage and the HTTP endpoints
"""

__version__ = "1.0.0"
