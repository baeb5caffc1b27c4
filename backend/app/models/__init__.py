from app.models.user import User
from app.models.organizer import Organizer
from app.models.venue import Venue
from app.models.sponsor import Sponsor, EventSponsor
from app.models.service_provider import ServiceProvider
from app.models.event import Event
from app.models.registration import EventRegistration
from app.models.service_booking import ServiceBooking
from app.models.review import Review
from app.models.message import Message
from app.models.password_reset import PasswordResetToken

__all__ = [
    "User", "Organizer", "Venue", "Sponsor", "EventSponsor", "ServiceProvider",
    "Event", "EventRegistration", "ServiceBooking", "Review", "Message",
    "PasswordResetToken",
]
