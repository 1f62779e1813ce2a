"""Keep a staging -> production release pull request in sync."""

__version__ = "0.1.0"
