"""Axis-aligned longitude/latitude bounding boxes."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable

from .coordinates import Coordinates

_NUMBER = r"(-?[0-9]+.[0-9]+)"
_BOUNDS_PATTERN = re.compile("_".join([_NUMBER] * 4))
_LEADING_FLOAT = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")


def _leading_float(text: str) -> float:
    match = _LEADING_FLOAT.match(text)
    if match is None:
        raise ValueError(f"not a number: {text!r}")
    return float(match.group(0))


@dataclass
class Bounds:
    """A bounding box; the default is empty (min above max)."""

    min: Coordinates = field(default_factory=lambda: Coordinates(180.0, 90.0))
    max: Coordinates = field(default_factory=lambda: Coordinates(-180.0, -90.0))

    @classmethod
    def from_coordinates(cls, coords: Iterable[Coordinates]) -> "Bounds":
        """Smallest bounds enclosing all the given coordinates."""
        bounds = cls()
        for point in coords:
            bounds.update(point)
        return bounds

    @classmethod
    def from_string(cls, bounds_string: str) -> "Bounds":
        """Parse ``minlon_minlat_maxlon_maxlat``; unparsable text gives empty bounds."""
        bounds = cls()
        match = _BOUNDS_PATTERN.fullmatch(bounds_string)
        if match:
            min_lon, min_lat, max_lon, max_lat = map(_leading_float, match.groups())
            bounds.min = Coordinates(min_lon, min_lat)
            bounds.max = Coordinates(max_lon, max_lat)
        return bounds

    def update(self, coords: Coordinates) -> None:
        """Grow the bounds to include the given point."""
        self.min = Coordinates(min(self.min.lon, coords.lon), min(self.min.lat, coords.lat))
        self.max = Coordinates(max(self.max.lon, coords.lon), max(self.max.lat, coords.lat))

    def __ge__(self, other: "Bounds") -> bool:
        """True if ``other`` lies within or on these bounds."""
        if not isinstance(other, Bounds):
            return NotImplemented
        return (
            self.min.lon <= other.min.lon
            and self.min.lat <= other.min.lat
            and self.max.lon >= other.max.lon
            and self.max.lat >= other.max.lat
        )

    def diffs(self) -> Coordinates:
        """Extent of the bounds as ``max - min``."""
        return Coordinates(self.max.lon - self.min.lon, self.max.lat - self.min.lat)

    def to_string(self) -> str:
        """Key form used for file and directory names."""
        return (
            f"{self.min.lon:.2f}_{self.min.lat:.2f}_"
            f"{self.max.lon:.2f}_{self.max.lat:.2f}"
        )

    def __str__(self) -> str:
        return self.to_string()