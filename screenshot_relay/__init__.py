"""Screenshot Relay - render HTML to images and persist them to object storage."""

__version__ = "0.1.0"
