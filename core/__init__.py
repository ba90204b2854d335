"""
Core package: configuration, database connection, errors, and middleware.
Kept apart from routes and services so each can be swapped in tests.
"""

from core.config import get_settings

__all__ = ["get_settings"]
