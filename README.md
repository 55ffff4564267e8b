# fourmaps

Tools for building square elevation "chunks" from a locally running
Valhalla service, storing them on disk, and loading the chunks that
surround a moving position.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Concepts

- `fourmaps.coordinates.Coordinates`: a frozen longitude/latitude pair.
  It supports `+` and `-` with another `Coordinates` or with a number,
  which is applied to both components. It unpacks as `lon, lat`, and
  `Coordinates.from_pair((lon, lat))` builds one from a pair.
- `fourmaps.bounds.Bounds`: a `min`/`max` rectangle. A default `Bounds()`
  is empty (min at 180, 90 and max at -180, -90), so `update(point)` and
  `Bounds.from_coordinates(points)` grow it to enclose the given points.
  `to_string()` (also `str()`) gives the `minlon_minlat_maxlon_maxlat`
  form with two decimals used for file and directory names, and
  `Bounds.from_string()` reads it back; text that does not match gives
  empty bounds. `a >= b` is true when `b` lies within or on `a`, and
  `diffs()` returns the extent as `max - min`.
- `fourmaps.chunk.Chunk`: a `width * width` grid of heights over a
  `Bounds`. `generate_chunk_coordinates()` lists the sample positions row
  by row from the minimum corner. `write_elevation_data(path, overwrite_data)`
  stores the heights as raw float32 values in `path/<bounds>.dat`
  (creating the directory, and leaving an existing file alone unless
  `overwrite_data` is true) and returns the file path.
  `Chunk.from_file(path)` loads such a file, taking the bounds from the
  file name and the width from the square root of the number of values.
- `fourmaps.chunk.get_chunk_origin(position, chunk_width_degrees)`: the
  bottom-left corner of the grid cell containing `position`.
- `fourmaps.chunk_manager.ChunkManager`: loads the chunks around the
  current position from a data directory whenever that position moves
  into a new chunk.

## Downloading elevation data

A Valhalla service must be installed. `ElevationService.start_service()`
checks `http://localhost:8002/status`; if nothing answers it starts
`valhalla_service /opt/valhalla/valhalla.json` in the background, waits
half a second and checks again, raising `ServiceError` if the service
still does not answer. Once it answers, the bounds of every map the
service reports are recorded and available as `service.bounds`.

```python
from pathlib import Path
from fourmaps.elevation_service import ElevationService

service = ElevationService()
service.download_all_maps(Path("data"), 0.1, 64, False)
```

Each map becomes a directory under `data/` named after its bounds, filled
with one `.dat` file per chunk. A map whose directory already exists is
skipped unless `overwrite_data` is true. Chunks carry one extra unit of
padding along their top and right edges.

`ElevationService` takes `base_url`, `config_path` and a
`requests.Session`, so it can point at another address or use a prepared
session. `get_elevation(MapGenerationInfo(...))` returns the chunks for a
single area without writing them; heights the service reports as `null`
become `0.0`. The request body is built by `format_elevation_request`,
which uses `encode_polyline` (precision 6) on the sample points.

## Loading chunks around a position

```python
from fourmaps.chunk_manager import ChunkManager
from fourmaps.coordinates import Coordinates

manager = ChunkManager("data")
if manager.update_position(Coordinates(-122.41, 37.77), 0.1, 2):
    for chunk in manager.chunks:
        print(chunk.bounds, chunk.width, len(chunk.height_data))
```

The data directory must hold only map sub-directories, each holding
`.dat` chunk files, as `download_all_maps` writes them. `update_position`
returns `False` when the position is still in the same chunk as before,
so it is cheap to call on every movement. `chunks` is a property holding
a copy of the loaded chunks.

## Finding OSM files

`fourmaps.file_system.get_osm_files(directory)` lists the `.pbf` files
directly inside a directory (by default `/opt/valhalla/`), sorted by path.

## What it does not do

The package only lists `.pbf` files; it does not open or parse
OpenStreetMap data itself. Map extents and heights all come from the
Valhalla service. There is no command-line program; everything is used
from Python.