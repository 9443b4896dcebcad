"""Presentation helpers: CORTEX feed and HTML formatters."""
