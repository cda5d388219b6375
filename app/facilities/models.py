from dataclasses import dataclass, field

FACILITY_KINDS = ("hospital", "clinic", "urgent-care")


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class SearchStage:
    """One nearby-search request: a radius in metres and a Places keyword."""

    radius_m: int
    keyword: str


@dataclass(frozen=True)
class Facility:
    """A healthcare facility near the user, as shown on the facilities page."""

    id: str
    name: str
    address: str
    kind: str
    distance: float
    availability: str = "unknown"
    rating: float | None = None
    location: Coordinates | None = None
    operating_hours: str | None = None
    specialties: list[str] = field(default_factory=list)
