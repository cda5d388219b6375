import math

from app.facilities.models import Coordinates

EARTH_RADIUS_MILES = 3958.8


def haversine_miles(origin: Coordinates, target: Coordinates) -> float:
    """Great-circle distance between two points in miles, rounded to 0.1."""
    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(target.latitude)
    d_lat = lat2 - lat1
    d_lng = math.radians(target.longitude - origin.longitude)

    a = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return round(EARTH_RADIUS_MILES * c, 1)
