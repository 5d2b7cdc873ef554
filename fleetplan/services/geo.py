"""
Great-circle distance and flight-time derivation.
"""

import logging
import math
from typing import Optional

from ..models.airport import AirportModel, GeoPoint

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0


def _finite_positive(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value) and value > 0


class GeoCalculator:
    """Stateless distance and duration helpers."""

    @staticmethod
    def distance(a: Optional[GeoPoint], b: Optional[GeoPoint]) -> float:
        """
        Haversine distance in kilometres, rounded to 0.1 km.

        Args:
            a: First point
            b: Second point

        Returns:
            Distance in km; 0.0 when either point is missing or unset (0, 0)
        """
        if a is None or b is None or a.is_unset or b.is_unset:
            return 0.0

        lat1, lon1 = math.radians(a.latitude), math.radians(a.longitude)
        lat2, lon2 = math.radians(b.latitude), math.radians(b.longitude)
        dlat = lat2 - lat1
        dlon = lon2 - lon1

        h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
        # clamp against rounding just above 1.0 for antipodal points
        h = min(1.0, max(0.0, h))
        km = 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))
        return max(0.0, round(km, 1))

    @staticmethod
    def airport_distance(departure: Optional[AirportModel], arrival: Optional[AirportModel]) -> float:
        """Distance between two airports' recorded locations."""
        if departure is None or arrival is None:
            return 0.0
        return GeoCalculator.distance(departure.location, arrival.location)

    @staticmethod
    def flight_time(distance_km: Optional[float], speed_kmh: Optional[float]) -> int:
        """
        Airborne minutes for a distance at cruise speed, rounded half-up.

        Returns 0 when either input is non-positive or not finite.
        """
        if not _finite_positive(distance_km) or not _finite_positive(speed_kmh):
            logger.debug(f"No flight time for distance={distance_km} speed={speed_kmh}")
            return 0
        return int(math.floor(distance_km / speed_kmh * 60 + 0.5))
