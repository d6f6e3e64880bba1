"""
Domain Interfaces (Ports)
"""

from .clients import ProfileStore

__all__ = [
    "ProfileStore",
]
