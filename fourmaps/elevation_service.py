"""Client for a local Valhalla service providing map bounds and elevation data."""

from __future__ import annotations

import json
import math
import subprocess
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import requests

from .bounds import Bounds
from .chunk import Chunk
from .coordinates import Coordinates

PathLike = Union[str, Path]

DEFAULT_BASE_URL = "http://localhost:8002"
DEFAULT_CONFIG_PATH = "/opt/valhalla/valhalla.json"
POLYLINE_PRECISION = 6
_JSON_HEADERS = {"Content-Type": "Application/json"}
_STARTUP_DELAY = 0.5
_MAX_WORKERS = 32


@dataclass
class MapGenerationInfo:
    """Parameters describing how a map area is split into chunks."""

    bounds: Bounds
    chunk_width_degrees: float
    width: int
    padding: bool


class ServiceError(RuntimeError):
    """Raised when the elevation service cannot be reached or started."""


def _scaled(value: float, factor: int) -> int:
    magnitude = math.floor(abs(value) * factor + 0.5)
    return int(magnitude) if value >= 0 else -int(magnitude)


def _encode_value(value: int) -> str:
    value = ~(value << 1) if value < 0 else value << 1
    out = []
    while value >= 0x20:
        out.append(chr((0x20 | (value & 0x1F)) + 63))
        value >>= 5
    out.append(chr(value + 63))
    return "".join(out)


def encode_polyline(
    points: Iterable[Tuple[float, float]], precision: int = POLYLINE_PRECISION
) -> str:
    """Encode ``(lat, lon)`` points as an encoded polyline string."""
    factor = 10**precision
    encoded = []
    prev_lat = prev_lon = 0
    for lat, lon in points:
        lat_i = _scaled(lat, factor)
        lon_i = _scaled(lon, factor)
        encoded.append(_encode_value(lat_i - prev_lat))
        encoded.append(_encode_value(lon_i - prev_lon))
        prev_lat, prev_lon = lat_i, lon_i
    return "".join(encoded)


def format_elevation_request(coords: Sequence[Coordinates]) -> str:
    """Build the JSON body of a height request for the given coordinates."""
    payload = {
        "encoded_polyline": encode_polyline(
            ((point.lat, point.lon) for point in coords), POLYLINE_PRECISION
        ),
        "height_precision": 2,
        "shape_format": POLYLINE_PRECISION,
    }
    return json.dumps(payload, separators=(",", ":"), sort_keys=True)


class ElevationService:
    """Talks to a Valhalla service for status, map bounds and heights."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        config_path: PathLike = DEFAULT_CONFIG_PATH,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.config_path = str(config_path)
        self.session = session if session is not None else requests.Session()
        self.latest_response: Optional[requests.Response] = None
        self.polygons: List[List[Coordinates]] = []
        self._bounds: List[Bounds] = []

    def start_service(self) -> None:
        """Start the service in the background unless it already answers."""
        if self.ping():
            return
        try:
            subprocess.Popen(["valhalla_service", self.config_path])
        except OSError:
            pass
        time.sleep(_STARTUP_DELAY)
        if not self.ping():
            raise ServiceError("Failed to start the valhalla service.")
        self.update_service_info()

    def download_all_maps(
        self,
        data_path: PathLike,
        chunk_width_degrees: float,
        chunk_width_units: int,
        overwrite_data: bool = False,
    ) -> None:
        """Fetch and store elevation chunks for every map the service knows."""
        self.start_service()
        data_path = Path(data_path)
        for map_bounds in self.bounds:
            map_dir = data_path / map_bounds.to_string()
            if map_dir.exists() and not overwrite_data:
                continue
            info = MapGenerationInfo(
                bounds=map_bounds,
                chunk_width_degrees=chunk_width_degrees,
                width=chunk_width_units,
                padding=True,
            )
            for chunk in self.get_elevation(info):
                chunk.write_elevation_data(map_dir, overwrite_data)

    def get_elevation(self, map_gen_info: MapGenerationInfo) -> List[Chunk]:
        """Split the area into chunks and fill each with heights from the service."""
        error = Chunk.ERROR
        step = map_gen_info.chunk_width_degrees
        one_unit = step / map_gen_info.width if map_gen_info.padding else 0.0
        area = map_gen_info.bounds

        chunks: List[Chunk] = []
        lat = area.min.lat
        while lat < area.max.lat - error:
            lon = area.min.lon
            while lon < area.max.lon - error:
                chunk_bounds = Bounds.from_coordinates(
                    [
                        Coordinates(lon, lat),
                        Coordinates(lon + step + one_unit, lat + step + one_unit),
                    ]
                )
                chunks.append(Chunk(map_gen_info.width, chunk_bounds))
                lon += step
            lat += step

        if chunks:
            workers = min(_MAX_WORKERS, len(chunks))
            with ThreadPoolExecutor(max_workers=workers) as pool:
                list(pool.map(self._fill_heights, chunks))
        return chunks

    def _fill_heights(self, chunk: Chunk) -> None:
        body = format_elevation_request(chunk.generate_chunk_coordinates())
        response = self.session.post(
            f"{self.base_url}/height", data=body, headers=_JSON_HEADERS
        )
        heights = response.json()["height"]
        chunk.height_data = [0.0 if h is None else float(h) for h in heights]

    @property
    def bounds(self) -> List[Bounds]:
        """Bounds of each map loaded by the service."""
        return list(self._bounds)

    def ping(self) -> bool:
        """Return True if the status endpoint answers with HTTP 200."""
        try:
            self.latest_response = self.session.get(
                f"{self.base_url}/status",
                data='{"verbose": true}',
                headers=_JSON_HEADERS,
            )
        except requests.RequestException:
            self.latest_response = None
            return False
        return self.latest_response.status_code == 200

    def update_service_info(self) -> None:
        """Record one polygon and one bounds per map listed in the service status."""
        if not self.ping():
            return
        status = self.latest_response.json()
        for feature in status["bbox"]["features"]:
            polygon = [
                Coordinates.from_pair(pair)
                for pair in feature["geometry"]["coordinates"][0]
            ]
            self.polygons.append(polygon)
            self._bounds.append(Bounds.from_coordinates(polygon))