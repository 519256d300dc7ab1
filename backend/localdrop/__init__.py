"""LocalDrop: share text and files with everyone on the local network."""

__version__ = "1.0.0"
