"""School roster API: identity and credential services."""

__version__ = "0.1.0"
