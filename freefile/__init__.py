"""Free File Navigator: offer matching and federal tax estimates."""

__version__ = "0.1.0"
