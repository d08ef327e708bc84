import logging
from typing import Dict, Optional
import math

logger = logging.getLogger(__name__)

EARTH_RADIUS_MILES = 3963
DEFAULT_DISTANCE_MILES = 50.0  # assumed when either location is unknown

def _has_coordinates(coords: Optional[Dict[str, float]]) -> bool:
    return bool(coords) and coords.get('lat') is not None and coords.get('lng') is not None

def calculate_distance(
    coords1: Optional[Dict[str, float]],
    coords2: Optional[Dict[str, float]],
    default: float = DEFAULT_DISTANCE_MILES
) -> float:
    """
    Calculate distance between two coordinates using Haversine formula.
    Returns distance in miles, or ``default`` when either side has no
    coordinates.
    """
    if not _has_coordinates(coords1) or not _has_coordinates(coords2):
        return default

    lat1 = math.radians(coords1['lat'])
    lon1 = math.radians(coords1['lng'])
    lat2 = math.radians(coords2['lat'])
    lon2 = math.radians(coords2['lng'])

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = math.sin(dlat/2)**2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon/2)**2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_MILES * c
