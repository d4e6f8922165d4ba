"""eagov — governance validation for enterprise-architecture repositories."""

__version__ = "0.3.0"
