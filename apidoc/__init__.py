"""Example-response synthesis for API documentation."""

__version__ = "0.1.0"
