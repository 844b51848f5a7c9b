"""Bearer-token authorizer backed by a single shared admin token."""

import hmac
import os

from shared.auth.port import AccessDenied, Authorizer, Principal

ADMIN_TOKEN_ENV = "SHOPFRONT_ADMIN_TOKEN"


class StaticTokenAuthorizer(Authorizer):
    """Accepts ``Authorization: Bearer <token>`` when the token matches.

    With no token configured every request is denied.
    """

    def __init__(self, token: str | None = None, principal_id: str = "admin") -> None:
        self.token = token if token is not None else os.getenv(ADMIN_TOKEN_ENV, "")
        self.principal_id = principal_id

    def authorize(self, request) -> Principal:
        header = request.headers.get("authorization", "")
        scheme, _, credentials = header.partition(" ")

        if scheme.lower() != "bearer" or not credentials:
            raise AccessDenied("Authentication token not found")
        if not self.token or not hmac.compare_digest(credentials.strip(), self.token):
            raise AccessDenied("Invalid or expired authentication token")

        return Principal(id=self.principal_id)
