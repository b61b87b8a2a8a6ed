"""HTTP service for wallets and money transfers between them, stored in PostgreSQL with a Redis cache."""

__version__ = "0.1.0"

__all__ = ["__version__"]