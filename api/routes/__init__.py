"""API route handlers."""

from api.routes import health, distribution, claims

__all__ = ["health", "distribution", "claims"]
