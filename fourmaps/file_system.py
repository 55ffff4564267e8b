"""Locating OpenStreetMap data files on disk."""

from __future__ import annotations

from pathlib import Path
from typing import List, Union

OSM_FILE_DIR = Path("/opt/valhalla/")


def get_osm_files(directory: Union[str, Path] = OSM_FILE_DIR) -> List[Path]:
    """Return the ``.pbf`` files found directly inside ``directory``, sorted by path."""
    return sorted(
        entry for entry in Path(directory).iterdir() if entry.suffix == ".pbf"
    )