"""Pricing domain API package."""

from pricing.api.routes import router

__all__ = ["router"]
