"""Psychology practice site with an admin-editable content store."""

__version__ = "0.1.0"
