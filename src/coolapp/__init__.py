"""CoolApp - weather forecast CRUD service."""

__version__ = "0.1.0"
