"""
Data-access layer.

``Storage`` is built once in the app lifespan from a session factory and
reached by routes through ``app.api.deps.get_storage``.
"""

from app.storage.events import EventStore
from app.storage.messages import MessageStore
from app.storage.organizers import OrganizerStore
from app.storage.password_reset import PasswordResetStore
from app.storage.providers import ServiceProviderStore
from app.storage.registrations import RegistrationStore, generate_ticket_code, MAX_TICKET_CODE_ATTEMPTS
from app.storage.reviews import ReviewStore
from app.storage.sponsors import SponsorStore
from app.storage.users import UserStore
from app.storage.venues import VenueStore


class Storage(
    UserStore,
    EventStore,
    RegistrationStore,
    VenueStore,
    OrganizerStore,
    SponsorStore,
    ServiceProviderStore,
    ReviewStore,
    MessageStore,
    PasswordResetStore,
):
    """Every persistence operation the application performs."""


__all__ = ["Storage", "generate_ticket_code", "MAX_TICKET_CODE_ATTEMPTS"]
