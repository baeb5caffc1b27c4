from app.schemas.user import (
    UserRegister, UserLogin, UserUpsert, UserUpdate, UserResponse, RoleUpdate,
    PasswordResetRequest, PasswordResetConfirm,
)
from app.schemas.event import EventCreate, EventUpdate, EventFilters, EventResponse, EventDetailResponse, RegistrationResponse
from app.schemas.organizer import OrganizerCreate, OrganizerUpdate, OrganizerResponse
from app.schemas.venue import VenueCreate, VenueUpdate, VenueResponse
from app.schemas.sponsor import SponsorCreate, SponsorUpdate, SponsorResponse, EventSponsorCreate, EventSponsorResponse
from app.schemas.service_provider import (
    ServiceProviderCreate, ServiceProviderUpdate, ServiceProviderResponse,
    ServiceBookingCreate, ServiceBookingResponse,
)
from app.schemas.review import ReviewCreate, ReviewResponse
from app.schemas.message import MessageCreate, MessageResponse, ConversationResponse
from app.schemas.stats import StatsResponse

__all__ = [
    "UserRegister", "UserLogin", "UserUpsert", "UserUpdate", "UserResponse", "RoleUpdate",
    "PasswordResetRequest", "PasswordResetConfirm",
    "EventCreate", "EventUpdate", "EventFilters", "EventResponse", "EventDetailResponse", "RegistrationResponse",
    "OrganizerCreate", "OrganizerUpdate", "OrganizerResponse",
    "VenueCreate", "VenueUpdate", "VenueResponse",
    "SponsorCreate", "SponsorUpdate", "SponsorResponse", "EventSponsorCreate", "EventSponsorResponse",
    "ServiceProviderCreate", "ServiceProviderUpdate", "ServiceProviderResponse",
    "ServiceBookingCreate", "ServiceBookingResponse",
    "ReviewCreate", "ReviewResponse",
    "MessageCreate", "MessageResponse", "ConversationResponse",
    "StatsResponse",
]
