"""Longitude/latitude pairs with simple component-wise arithmetic."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

_Operand = Union["Coordinates", float, int]


@dataclass(frozen=True, eq=False)
class Coordinates:
    """A point given as longitude and latitude in degrees."""

    lon: float
    lat: float

    @classmethod
    def from_pair(cls, coords) -> "Coordinates":
        """Build from a ``(longitude, latitude)`` pair."""
        lon, lat = coords
        return cls(float(lon), float(lat))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Coordinates):
            return NotImplemented
        return self.lon == other.lon and self.lat == other.lat

    def __hash__(self) -> int:
        return hash((self.lon, self.lat))

    def __iter__(self):
        yield self.lon
        yield self.lat

    def __add__(self, other: _Operand) -> "Coordinates":
        if isinstance(other, Coordinates):
            return Coordinates(self.lon + other.lon, self.lat + other.lat)
        if isinstance(other, (int, float)):
            return Coordinates(self.lon + other, self.lat + other)
        return NotImplemented

    def __sub__(self, other: _Operand) -> "Coordinates":
        if isinstance(other, Coordinates):
            return Coordinates(self.lon - other.lon, self.lat - other.lat)
        if isinstance(other, (int, float)):
            return Coordinates(self.lon - other, self.lat - other)
        return NotImplemented