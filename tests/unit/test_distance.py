import pytest

from app.facilities.distance import haversine_miles
from app.facilities.models import Coordinates


class TestHaversineMiles:
    def test_same_point_is_zero(self) -> None:
        point = Coordinates(40.7128, -74.0060)
        assert haversine_miles(point, point) == 0.0

    def test_new_york_to_los_angeles(self) -> None:
        new_york = Coordinates(40.7128, -74.0060)
        los_angeles = Coordinates(34.0522, -118.2437)
        assert haversine_miles(new_york, los_angeles) == pytest.approx(2445.6, abs=1.0)

    def test_one_degree_of_latitude(self) -> None:
        assert haversine_miles(Coordinates(0, 0), Coordinates(1, 0)) == 69.1

    def test_symmetric_and_rounded(self) -> None:
        a = Coordinates(51.5074, -0.1278)
        b = Coordinates(48.8566, 2.3522)
        distance = haversine_miles(a, b)
        assert distance == haversine_miles(b, a)
        assert distance == round(distance, 1)
