"""
Authorization capability passed into storage mutations.

An Actor is only minted by the route dependencies in ``app.api.deps`` once the
caller's role or ownership check has passed. Storage mutation methods require
one, so a write cannot be issued without going through that check first.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Actor:
    user_id: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
