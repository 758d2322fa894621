"""Sync canonical rule documents into AI coding assistant formats."""

__version__ = "0.1.0"
