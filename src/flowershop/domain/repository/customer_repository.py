"""Abstract repository for CustomerProfile aggregate (the Customer Directory)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from flowershop.domain.model.customer import CustomerProfile
from flowershop.domain.model.page import Page, PageRequest


class CustomerRepository(ABC):

    @abstractmethod
    def get_by_id(self, customer_id: int, include_inactive: bool = False) -> CustomerProfile | None:
        """Return a profile by its ID, or None if not found."""

    @abstractmethod
    def find_by_email(self, email: str, include_inactive: bool = False) -> CustomerProfile | None:
        """Return the profile stored under exactly this email, or None."""

    @abstractmethod
    def list_page(self, page: PageRequest) -> Page[CustomerProfile]:
        """Return one page of active profiles, newest first."""

    @abstractmethod
    def add(self, profile: CustomerProfile) -> CustomerProfile:
        """Persist a new profile and assign its ID."""

    @abstractmethod
    def save(self, profile: CustomerProfile) -> None:
        """Persist changes to an existing profile."""

    def find_or_create_by_email(
        self, email: str, defaults: CustomerProfile
    ) -> tuple[CustomerProfile, bool]:
        """Return ``(profile, was_created)`` for ``email``, inactive rows included.

        An inactive profile is returned as found; reactivating it is the
        caller's decision (see ``reactivate``).
        """
        existing = self.find_by_email(email, include_inactive=True)
        if existing is not None:
            return existing, False
        return self.add(defaults), True

    def reactivate(self, profile: CustomerProfile, fallback_name: str | None = None) -> None:
        profile.reactivate(fallback_name)
        self.save(profile)
