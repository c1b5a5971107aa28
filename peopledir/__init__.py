"""People directory search, ranking and display reconciliation."""

__version__ = "0.3.0"
