"""A JSON HTTP API for users and their products, with token-based access."""

__version__ = "0.1.0"