"""Command-driven agents on a tile grid."""

__version__ = "0.1.0"
