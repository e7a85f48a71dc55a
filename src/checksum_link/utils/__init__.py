"""Utilities: the CRC engine."""
