"""Shared directory constants."""

TOURIST = "tourist"
TOUR_GUIDE = "tour_guide"
HOTEL_PARTNER = "hotel_partner"

USER_ROLES = (TOURIST, TOUR_GUIDE, HOTEL_PARTNER)
# Only these passion types can be published in the public directory
LISTABLE_PASSION_TYPES = (TOUR_GUIDE, HOTEL_PARTNER)

ADMIN_ROLE = "admin"

INCOMPLETE_REGISTRATION_MESSAGE = "User registration is not complete for this passion type"

# Suggestions
MIN_SUGGESTION_QUERY_LENGTH = 2
MAX_SUGGESTIONS = 10

# Shown on the search page before the user types anything
POPULAR_SEARCHES = (
    "Delhi",
    "Mumbai",
    "Goa",
    "Jaipur",
    "Historical Tours",
    "Adventure Tours",
    "Beach Resort",
    "Heritage Hotel",
    "Wildlife Tours",
    "Cultural Tours",
)
