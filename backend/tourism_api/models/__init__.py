from tourism_api.models.base import Base
from tourism_api.models.bookings import AccommodationBooking, ActivityBooking
from tourism_api.models.catalogue import Activity, Listing
from tourism_api.models.onboarding import TourismOnboarding
from tourism_api.models.profile import Profile, PromptCount

__all__ = [
    "Base",
    "TourismOnboarding",
    "AccommodationBooking",
    "ActivityBooking",
    "Listing",
    "Activity",
    "Profile",
    "PromptCount",
]
