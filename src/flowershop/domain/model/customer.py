"""CustomerProfile aggregate: the CRM record that owns orders.

A profile is distinct from the login identity.  It is keyed by email
(case-sensitive, as stored) and soft-deleted through its ``active`` flag.
"""

from __future__ import annotations

from dataclasses import dataclass

from flowershop.domain.exceptions import ValidationError


def default_name_for(email: str) -> str:
    """Display name used when nobody supplied one: the email local-part."""
    return email.split("@", 1)[0]


@dataclass
class CustomerProfile:

    id: int | None
    email: str
    name: str
    address: str | None = None
    phone: str | None = None
    active: bool = True

    @staticmethod
    def create(
        email: str,
        name: str | None = None,
        address: str | None = None,
        phone: str | None = None,
    ) -> CustomerProfile:
        if not email or not email.strip():
            raise ValidationError("Customer email is required")
        email = email.strip()
        name = (name or "").strip() or default_name_for(email)
        return CustomerProfile(
            id=None, email=email, name=name, address=address, phone=phone
        )

    def reactivate(self, fallback_name: str | None = None) -> None:
        """Bring a soft-deleted profile back instead of recreating it."""
        self.active = True
        if not self.name:
            self.name = fallback_name or default_name_for(self.email)

    def deactivate(self) -> None:
        self.active = False
