"""Elevation chunk generation, storage and loading backed by a Valhalla service."""

__version__ = "0.1.0"
__all__ = [
    "bounds",
    "chunk",
    "chunk_manager",
    "coordinates",
    "elevation_service",
    "file_system",
]