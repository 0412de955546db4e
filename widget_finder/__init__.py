"""
widget_finder — read-only widget lookups against the catalog database.
"""

__version__ = "1.0.0"
