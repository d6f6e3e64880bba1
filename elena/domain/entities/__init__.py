"""Domain Entities - Core business objects."""

from .profile import Profile, normalize_email

__all__ = [
    "Profile",
    "normalize_email",
]
