"""Auth gate port (abstract interface).

Token issuance and validation live outside the catalogue and ordering
domains. Admin-only endpoints only need a yes/no answer plus the principal
that made the request, so this port is all the API layer depends on.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Principal:
    """The authenticated caller of an admin-only operation."""

    id: str
    role: str = "admin"


class AccessDenied(Exception):
    """The request carries no valid credentials."""


class Authorizer(ABC):
    """Abstract auth gate."""

    @abstractmethod
    def authorize(self, request) -> Principal:
        """Return the request's principal or raise ``AccessDenied``."""
        ...
