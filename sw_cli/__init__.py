"""Interactive CLI that assembles service worker and file manifest builds."""

__version__ = "0.1.0"
