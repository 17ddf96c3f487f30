"""Cursor pagination over GitHub repository connections."""
