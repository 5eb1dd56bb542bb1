"""CLI interface for the achview NACHA decoder.

This package provides command-line access to the decoder: serializing a
parsed file, listing or exporting its entries, and inspecting its totals.
"""
