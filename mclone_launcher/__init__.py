"""Self-locating launcher for the bundled mclone tool."""

__version__ = "0.1.0"
