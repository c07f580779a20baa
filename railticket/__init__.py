"""Railway booking confirmation email parser."""

__version__ = "0.1.0"
