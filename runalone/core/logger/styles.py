"""Unified symbols for guard diagnostics."""


class LogStyle:
    """Logging style constants for consistent detail lines."""

    LIGHT = "─" * 60

    # Symbols
    ARROW = "»"      # For key-value pairs
    BULLET = "•"     # For list items
    WARNING = "⚠"    # For warnings

    # Indentation
    INDENT = "  "
