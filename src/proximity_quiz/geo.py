"""
Geographic primitives: a lat/lon point and great-circle distance.
"""

import math
from dataclasses import dataclass

# Mean equatorial radius, meters
EARTH_RADIUS_M = 6_378_137.0


@dataclass(frozen=True)
class Location:
    """A reported position in decimal degrees."""
    latitude: float
    longitude: float

    def to_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}

    @classmethod
    def from_dict(cls, data: dict) -> "Location":
        return cls(latitude=float(data["latitude"]), longitude=float(data["longitude"]))


def haversine_m(a: Location, b: Location) -> float:
    """Distance in meters between two points on a spherical Earth."""
    phi1, phi2 = math.radians(a.latitude), math.radians(b.latitude)
    dphi = math.radians(b.latitude - a.latitude)
    dlam = math.radians(b.longitude - a.longitude)
    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlam / 2) ** 2
    # Rounding can push h a hair outside [0, 1] for antipodal points
    h = min(1.0, max(0.0, h))
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
