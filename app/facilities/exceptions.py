class FacilitySearchError(Exception):
    """Base exception for nearby facility search errors."""


class NoFacilitiesFoundError(FacilitySearchError):
    """Raised when every search stage came back empty or failed."""
