"""Pexels infrastructure package."""

from .pexels_client import PexelsClient

__all__ = ["PexelsClient"]
