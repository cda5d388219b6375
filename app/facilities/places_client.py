from typing import Any

import httpx

from app.facilities.exceptions import FacilitySearchError
from app.facilities.models import Coordinates

DEFAULT_BASE_URL = "https://maps.googleapis.com/maps/api/place"


class PlacesClient:
    """Thin client for the Places Nearby Search JSON endpoint."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
        )

    def nearby_search(
        self, location: Coordinates, radius_m: int, keyword: str
    ) -> list[dict[str, Any]]:
        """Return raw place results around ``location``.

        Raises:
            FacilitySearchError: on transport errors, non-2xx replies or any
                status other than OK / ZERO_RESULTS.
        """
        params = {
            "location": f"{location.latitude},{location.longitude}",
            "radius": radius_m,
            "keyword": keyword,
            "key": self._api_key,
        }
        try:
            response = self._client.get("/nearbysearch/json", params=params)
        except httpx.HTTPError as exc:
            raise FacilitySearchError(f"Places request failed: {exc}") from exc

        if response.is_error:
            raise FacilitySearchError(f"Places API error {response.status_code}")

        try:
            data = response.json()
        except ValueError as exc:
            raise FacilitySearchError("Places API returned invalid JSON") from exc

        status = data.get("status") if isinstance(data, dict) else None
        if status == "ZERO_RESULTS":
            return []
        if status != "OK":
            raise FacilitySearchError(f"Places API returned status {status}")

        results = data.get("results")
        if not isinstance(results, list):
            return []
        return [place for place in results if isinstance(place, dict)]

    def close(self) -> None:
        self._client.close()
