"""
Database models for the URL shortener.
"""

from .link import Link

__all__ = ["Link"]
