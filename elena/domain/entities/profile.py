"""Profile entity representing a user record from the profile store."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def normalize_email(value: Any) -> Optional[str]:
    """Trim and lower-case an email; None unless it contains an '@'."""
    email = (_text(value) or "").lower()
    return email if "@" in email else None


@dataclass(frozen=True)
class Profile:
    """
    A user profile keyed by email.

    Only the columns the assistant reads are kept.
    """

    email: Optional[str] = None
    id: Optional[str] = None
    full_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    mode: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Profile":
        """Build a profile from a store row or an inline request profile."""
        return cls(
            email=normalize_email(data.get("email")),
            id=_text(data.get("id")),
            full_name=_text(data.get("full_name")),
            first_name=_text(data.get("first_name")),
            last_name=_text(data.get("last_name")),
            phone=_text(data.get("phone")),
            mode=_text(data.get("mode")),
            notes=_text(data.get("notes")),
        )

    @property
    def display_first_name(self) -> Optional[str]:
        """First name, falling back to the first word of the full name."""
        if self.first_name:
            return self.first_name
        if self.full_name:
            return self.full_name.split()[0]
        return None

    @property
    def display_full_name(self) -> Optional[str]:
        """Full name, falling back to "first last"."""
        if self.full_name:
            return self.full_name
        joined = " ".join(part for part in (self.first_name, self.last_name) if part)
        return joined or None
