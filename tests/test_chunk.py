import pytest

from fourmaps.bounds import Bounds
from fourmaps.chunk import Chunk, get_chunk_origin
from fourmaps.coordinates import Coordinates


def _bounds(min_lon, min_lat, max_lon, max_lat):
    return Bounds.from_coordinates(
        [Coordinates(min_lon, min_lat), Coordinates(max_lon, max_lat)]
    )


def test_generate_coordinates_count_and_start():
    chunk = Chunk(4, _bounds(0.0, 0.0, 1.0, 1.0))
    coords = chunk.generate_chunk_coordinates()
    assert len(coords) == chunk.width * chunk.width
    assert coords[0] == chunk.bounds.min


def test_generate_coordinates_within_bounds():
    chunk = Chunk(8, _bounds(-2.0, 3.0, 0.0, 5.0))
    coords = chunk.generate_chunk_coordinates()
    assert len(coords) == 64
    for c in coords:
        assert chunk.bounds.min.lon <= c.lon < chunk.bounds.max.lon
        assert chunk.bounds.min.lat <= c.lat < chunk.bounds.max.lat


def test_write_and_read_round_trip(tmp_path):
    heights = [1.5, -2.25, 100.0, 0.0]
    chunk = Chunk(2, _bounds(0.0, 0.0, 1.0, 1.0), list(heights))
    written = chunk.write_elevation_data(tmp_path / "map", False)
    assert written == tmp_path / "map" / (chunk.bounds.to_string() + ".dat")
    assert written.exists()

    loaded = Chunk.from_file(written)
    assert loaded.height_data == heights
    assert loaded.width == 2
    assert loaded.bounds == chunk.bounds


def test_write_without_overwrite_keeps_existing(tmp_path):
    bounds = _bounds(0.0, 0.0, 1.0, 1.0)
    Chunk(1, bounds, [1.5]).write_elevation_data(tmp_path, False)
    target = Chunk(1, bounds, [7.25]).write_elevation_data(tmp_path, False)
    assert Chunk.from_file(target).height_data == [1.5]


def test_write_with_overwrite_replaces(tmp_path):
    bounds = _bounds(0.0, 0.0, 1.0, 1.0)
    Chunk(1, bounds, [1.5]).write_elevation_data(tmp_path, False)
    target = Chunk(1, bounds, [7.25]).write_elevation_data(tmp_path, True)
    assert Chunk.from_file(target).height_data == [7.25]


def test_read_ignores_trailing_partial_float(tmp_path):
    chunk = Chunk(1, _bounds(0.0, 0.0, 1.0, 1.0), [3.5])
    path = chunk.write_elevation_data(tmp_path, False)
    path.write_bytes(path.read_bytes() + b"\x01\x02")
    other = Chunk(1, chunk.bounds)
    other.read_elevation_data(path)
    assert other.height_data == [3.5]


def test_from_file_width_is_square_root(tmp_path):
    chunk = Chunk(3, _bounds(0.0, 0.0, 1.0, 1.0), [0.5] * 9)
    loaded = Chunk.from_file(chunk.write_elevation_data(tmp_path, False))
    assert loaded.width == 3
    assert len(loaded.height_data) == loaded.width ** 2


@pytest.mark.parametrize("position", [(1.3, 2.7), (10.1, 0.2), (0.75, 45.9)])
def test_origin_contains_positive_position(position):
    width = 0.5
    origin = get_chunk_origin(Coordinates(*position), width)
    assert origin.lon <= position[0] < origin.lon + width
    assert origin.lat <= position[1] < origin.lat + width


@pytest.mark.parametrize("position", [(-1.3, -2.7), (-10.1, 0.2), (0.75, -45.9)])
def test_origin_contains_negative_position(position):
    width = 0.5
    origin = get_chunk_origin(Coordinates(*position), width)
    assert origin.lon <= position[0] + 1e-9
    assert position[0] < origin.lon + width
    assert origin.lat <= position[1] + 1e-9
    assert position[1] < origin.lat + width


def test_origin_negative_pinned():
    origin = get_chunk_origin(Coordinates(-0.25, -0.25), 0.5)
    assert origin == Coordinates(-0.5, -0.5)


def test_origin_does_not_mutate_position():
    position = Coordinates(-0.25, -0.75)
    get_chunk_origin(position, 0.5)
    assert position == Coordinates(-0.25, -0.75)