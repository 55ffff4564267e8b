"""Square grids of elevation samples covering a bounded area."""

from __future__ import annotations

import math
from array import array
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, List, Union

from .bounds import Bounds
from .coordinates import Coordinates

PathLike = Union[str, Path]

_FLOAT_SIZE = array("f").itemsize


@dataclass
class Chunk:
    """A ``width`` x ``width`` grid of heights inside ``bounds``."""

    width: int
    bounds: Bounds
    height_data: List[float] = field(default_factory=list)

    ERROR: ClassVar[float] = 0.0001

    @classmethod
    def from_file(cls, file_path: PathLike) -> "Chunk":
        """Load a chunk written by :meth:`write_elevation_data`."""
        file_path = Path(file_path)
        chunk = cls(0, Bounds.from_string(file_path.stem))
        chunk.read_elevation_data(file_path)
        chunk.width = math.isqrt(len(chunk.height_data))
        return chunk

    def generate_chunk_coordinates(self) -> List[Coordinates]:
        """All sample positions in the chunk, row by row from the minimum corner."""
        lon_diff, lat_diff = self.bounds.diffs()
        lon_step = lon_diff / self.width
        lat_step = lat_diff / self.width

        coordinates: List[Coordinates] = []
        lat = self.bounds.min.lat
        while lat < self.bounds.max.lat - self.ERROR:
            lon = self.bounds.min.lon
            while lon < self.bounds.max.lon - self.ERROR:
                coordinates.append(Coordinates(lon, lat))
                lon += lon_step
            lat += lat_step
        return coordinates

    def write_elevation_data(self, path: PathLike, overwrite_data: bool = False) -> Path:
        """Write heights as raw floats to ``path/<bounds>.dat`` and return that file."""
        filename = Path(path) / f"{self.bounds.to_string()}.dat"
        if filename.exists() and not overwrite_data:
            return filename
        filename.parent.mkdir(parents=True, exist_ok=True)
        filename.write_bytes(array("f", self.height_data).tobytes())
        return filename

    def read_elevation_data(self, path: PathLike) -> None:
        """Append the raw floats stored in ``path`` to :attr:`height_data`."""
        raw = Path(path).read_bytes()
        usable = len(raw) - len(raw) % _FLOAT_SIZE
        values = array("f")
        values.frombytes(raw[:usable])
        self.height_data.extend(values)


def get_chunk_origin(position: Coordinates, chunk_width_degrees: float) -> Coordinates:
    """Bottom-left corner of the chunk grid cell containing ``position``."""
    lon, lat = position
    if lon < 0:
        lon -= chunk_width_degrees
    if lat < 0:
        lat -= chunk_width_degrees
    return Coordinates(
        lon - math.fmod(lon, chunk_width_degrees),
        lat - math.fmod(lat, chunk_width_degrees),
    )