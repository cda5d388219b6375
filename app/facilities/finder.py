"""Staged nearby search for hospitals, clinics and urgent care."""

import math
from collections.abc import Sequence
from typing import Any

from app.config.settings import Settings
from app.facilities.distance import haversine_miles
from app.facilities.exceptions import FacilitySearchError, NoFacilitiesFoundError
from app.facilities.models import FACILITY_KINDS, Coordinates, Facility, SearchStage
from app.facilities.places_client import PlacesClient
from app.logging.logger import Log

SEARCH_STAGES: tuple[SearchStage, ...] = (
    SearchStage(1000, "hospital OR clinic OR urgent care"),
    SearchStage(5000, "hospital OR clinic OR urgent care"),
    SearchStage(10000, "hospital OR clinic"),
    SearchStage(25000, "hospital"),
)

TOP_RATED_MIN_RATING = 4.0
FILTER_TYPES = ("all", "open", "top_rated", *FACILITY_KINDS)


class FacilityFinder:
    """Widens the search radius stage by stage until enough places are found."""

    def __init__(
        self,
        client: PlacesClient,
        min_results: int = 10,
        stages: Sequence[SearchStage] = SEARCH_STAGES,
    ) -> None:
        self._client = client
        self._min_results = min_results
        self._stages = tuple(stages)

    def close(self) -> None:
        self._client.close()

    def find_nearby(self, location: Coordinates) -> list[Facility]:
        """Return facilities around ``location``, nearest first.

        Raises:
            NoFacilitiesFoundError: if no stage produced a single place.
        """
        places: dict[str, dict[str, Any]] = {}
        last_error: FacilitySearchError | None = None

        for stage in self._stages:
            try:
                results = self._client.nearby_search(location, stage.radius_m, stage.keyword)
            except FacilitySearchError as exc:
                Log.warning(f"Facility search stage {stage.radius_m}m failed: {exc}")
                last_error = exc
                continue

            for place in results:
                place_id = place.get("place_id")
                if place_id and place_id not in places:
                    places[place_id] = place
            Log.debug(f"Facility search stage {stage.radius_m}m: {len(places)} places so far")
            if len(places) >= self._min_results:
                break

        if not places:
            if last_error is not None:
                raise NoFacilitiesFoundError(
                    f"No facilities found: {last_error}"
                ) from last_error
            raise NoFacilitiesFoundError("No healthcare facilities found near this location")

        facilities = [to_facility(place, location) for place in places.values()]
        facilities.sort(key=lambda facility: facility.distance)
        Log.info(f"Found {len(facilities)} facilities, nearest {facilities[0].distance} mi")
        return facilities


def to_facility(place: dict[str, Any], origin: Coordinates) -> Facility:
    """Map one Places result onto a Facility."""
    types = [t for t in place.get("types") or [] if isinstance(t, str)]

    location = _place_location(place)
    # places without a location sort after every located one
    distance = haversine_miles(origin, location) if location is not None else math.inf

    hours = place.get("opening_hours")
    availability = "unknown"
    operating_hours = None
    if isinstance(hours, dict):
        open_now = hours.get("open_now")
        if isinstance(open_now, bool):
            availability = "open" if open_now else "closed"
        weekday_text = hours.get("weekday_text")
        if isinstance(weekday_text, list) and weekday_text:
            operating_hours = ", ".join(str(line) for line in weekday_text)

    rating = place.get("rating")
    return Facility(
        id=str(place.get("place_id") or ""),
        name=place.get("name") or "Unknown Hospital",
        address=place.get("vicinity") or "Address not available",
        kind=_facility_kind(types),
        distance=distance,
        availability=availability,
        rating=float(rating) if isinstance(rating, (int, float)) else None,
        location=location,
        operating_hours=operating_hours,
        specialties=types,
    )


def filter_facilities(
    facilities: Sequence[Facility],
    search_term: str = "",
    filter_type: str = "all",
) -> list[Facility]:
    """Apply the facilities page search box and filter dropdown.

    ``filter_type`` is one of FILTER_TYPES; unknown values behave like "all".
    Top-rated results are ordered by rating, everything else by distance.
    """
    matches = list(facilities)

    term = search_term.strip().lower()
    if term:
        matches = [
            f
            for f in matches
            if term in f.name.lower()
            or term in f.address.lower()
            or any(term in s.lower() for s in f.specialties)
        ]

    if filter_type == "top_rated":
        matches = [f for f in matches if f.rating is not None and f.rating >= TOP_RATED_MIN_RATING]
        matches.sort(key=lambda f: (-(f.rating or 0.0), f.distance))
        return matches

    if filter_type == "open":
        matches = [f for f in matches if f.availability == "open"]
    elif filter_type in FACILITY_KINDS:
        matches = [f for f in matches if f.kind == filter_type]

    matches.sort(key=lambda f: f.distance)
    return matches


def build_facility_finder(settings: Settings) -> FacilityFinder:
    client = PlacesClient(
        api_key=settings.google_places_api_key,
        timeout_seconds=settings.places_timeout_seconds,
    )
    return FacilityFinder(client, min_results=settings.facility_search_min_results)


def _place_location(place: dict[str, Any]) -> Coordinates | None:
    geometry = place.get("geometry")
    point = geometry.get("location") if isinstance(geometry, dict) else None
    if not isinstance(point, dict):
        return None
    lat, lng = point.get("lat"), point.get("lng")
    if not isinstance(lat, (int, float)) or not isinstance(lng, (int, float)):
        return None
    return Coordinates(float(lat), float(lng))


def _facility_kind(types: list[str]) -> str:
    # later checks win, so a hospital that is also a clinic stays a hospital
    kind = "hospital"
    if "clinic" in types or "medical_clinic" in types:
        kind = "clinic"
    if "urgent_care_facility" in types:
        kind = "urgent-care"
    if "hospital" in types:
        kind = "hospital"
    return kind
