"""Generate open source license files from bundled templates."""

__version__ = "0.1.0"
