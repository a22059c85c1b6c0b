"""
pinch package.

A personal clipboard history for the terminal: capture clipboard snapshots,
keep a bounded newest-first history on disk, and list, search, recall or clear
past entries.
"""

__version__ = "1.0.0"
