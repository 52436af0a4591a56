"""Shared helpers: scan policy switch and trace events."""
