"""
Common Value Objects

Value objects used across multiple domains:
- GeoPoint: a latitude/longitude pair with great-circle distance
- StayPeriod: a move-in date with an optional move-out date
"""

import math
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from shared.domain.base import ValueObject

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres between two coordinates."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


@dataclass(frozen=True)
class GeoPoint(ValueObject):
    """
    Geographic point value object

    Coordinates are stored as floats; Decimal values coming from the
    database are converted by ``from_coordinates``.
    """
    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90 <= self.latitude <= 90:
            raise ValueError(f"Latitude out of range: {self.latitude}")
        if not -180 <= self.longitude <= 180:
            raise ValueError(f"Longitude out of range: {self.longitude}")

    @classmethod
    def from_coordinates(
        cls,
        latitude: float | Decimal | None,
        longitude: float | Decimal | None,
    ) -> 'GeoPoint | None':
        """Build a point, or return None when either coordinate is missing."""
        if latitude is None or longitude is None:
            return None
        return cls(float(latitude), float(longitude))

    def distance_to(self, other: 'GeoPoint') -> float:
        """Haversine distance to ``other`` in kilometres"""
        return haversine_km(self.latitude, self.longitude, other.latitude, other.longitude)

    def to_dict(self) -> dict:
        return {'latitude': self.latitude, 'longitude': self.longitude}

    def __str__(self):
        return f"({self.latitude}, {self.longitude})"


@dataclass(frozen=True)
class StayPeriod(ValueObject):
    """
    Stay period value object

    A tenancy starts on ``move_in`` and may be open-ended. When ``move_out``
    is given it must not precede ``move_in``.
    """
    move_in: date
    move_out: date | None = None

    def __post_init__(self):
        if self.move_out is not None and self.move_out < self.move_in:
            raise ValueError(f"Move-out date ({self.move_out}) must not be before move-in date ({self.move_in})")

    @property
    def is_open_ended(self) -> bool:
        return self.move_out is None

    def __str__(self):
        end = self.move_out.isoformat() if self.move_out else '...'
        return f"{self.move_in.isoformat()} - {end}"
