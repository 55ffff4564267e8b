"""Keeps the chunks around the current position loaded from disk."""

from __future__ import annotations

import math
from pathlib import Path
from typing import List, Union

from .bounds import Bounds
from .chunk import Chunk, get_chunk_origin
from .coordinates import Coordinates


class ChunkManager:
    """Loads chunk files near a moving position from a data directory.

    The data directory holds one sub-directory per map, each holding
    ``<bounds>.dat`` chunk files.
    """

    def __init__(self, data_directory: Union[str, Path]) -> None:
        self._data_path = Path(data_directory)
        self._chunk_origin = Coordinates(math.nan, math.nan)
        self._chunks: List[Chunk] = []

    def update_position(
        self, position: Coordinates, chunk_width_degrees: float, chunk_width_n: int
    ) -> bool:
        """Reload chunks if ``position`` moved into a new chunk; return whether it did."""
        new_origin = get_chunk_origin(position, chunk_width_degrees)
        if not self.check_chunk_has_changed(new_origin):
            return False
        self._chunk_origin = new_origin
        self._load_chunk_data(chunk_width_degrees, chunk_width_n)
        return True

    def check_chunk_has_changed(self, chunk_origin: Coordinates) -> bool:
        """True if ``chunk_origin`` differs from the current origin."""
        return self._chunk_origin != chunk_origin

    @property
    def chunks(self) -> List[Chunk]:
        """The currently loaded chunks."""
        return list(self._chunks)

    def _load_chunk_data(self, chunk_width_degrees: float, chunk_width_n: int) -> None:
        reach = chunk_width_n * chunk_width_degrees
        origin = self._chunk_origin
        area = Bounds.from_coordinates(
            [origin - reach, origin + reach]
        )
        area.max = area.max + chunk_width_degrees + Chunk.ERROR
        area.min = area.min - Chunk.ERROR

        self._chunks = [
            Chunk.from_file(file)
            for map_directory in sorted(self._data_path.iterdir())
            for file in sorted(map_directory.iterdir())
            if area >= Bounds.from_string(file.stem)
        ]