"""Shared helpers: subprocess runner, archive I/O, folder prompt."""
