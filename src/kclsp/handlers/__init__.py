"""Conversion handlers, re-exported for callers that only need the entry points."""
from .diagnostics import get_diagnostics, get_file_diagnostics, lsp_location, lsp_position

__all__ = ['get_diagnostics', 'get_file_diagnostics', 'lsp_location', 'lsp_position']
