"""Market Connect - local business discovery, offers and analytics."""

__version__ = "0.1.0"
