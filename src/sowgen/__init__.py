"""Statement of Work assembly and export."""

__version__ = "0.1.0"
