"""Geographic utilities for location-based matching"""

import math
from typing import Any

EARTH_RADIUS_KM = 6371


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great circle distance between two points on Earth
    Returns distance in kilometers
    """
    # Convert to radians
    lat1, lon1, lat2, lon2 = map(math.radians, [lat1, lon1, lat2, lon2])

    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = math.sin(dlat/2)**2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon/2)**2
    # Rounding can push a a hair above 1 for antipodal points
    c = 2 * math.asin(math.sqrt(min(1.0, a)))

    return EARTH_RADIUS_KM * c


def extract_coordinates(location_data: dict[str, Any] | None) -> tuple[float, float] | None:
    """Extract latitude and longitude from location metadata"""
    if not location_data:
        return None

    if location_data.get("lat") is not None and location_data.get("lon") is not None:
        return float(location_data["lat"]), float(location_data["lon"])

    if location_data.get("latitude") is not None and location_data.get("longitude") is not None:
        return float(location_data["latitude"]), float(location_data["longitude"])

    if "coordinates" in location_data:
        coords = location_data["coordinates"]
        if isinstance(coords, (list, tuple)) and len(coords) == 2:
            return float(coords[1]), float(coords[0])  # GeoJSON is [lon, lat]

    return None

