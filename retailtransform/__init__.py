"""Extract products from the retail store and emit sink-ready author records."""

__version__ = "0.1.0"
