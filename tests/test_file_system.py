from pathlib import Path

import pytest

from fourmaps.file_system import get_osm_files


def _touch(path: Path) -> Path:
    path.write_bytes(b"")
    return path


def test_lists_only_pbf_files(tmp_path):
    first = _touch(tmp_path / "andorra-latest.osm.pbf")
    second = _touch(tmp_path / "monaco.pbf")
    _touch(tmp_path / "valhalla.json")
    _touch(tmp_path / "notes.txt")

    files = get_osm_files(tmp_path)

    assert files == sorted([first, second])


def test_read_map_files_finds_every_map(tmp_path):
    names = ["a.pbf", "b.pbf", "c.pbf"]
    for name in names:
        _touch(tmp_path / name)

    files = get_osm_files(tmp_path)

    assert [file.name for file in files] == names
    assert all(file.is_file() for file in files)


def test_does_not_descend_into_subdirectories(tmp_path):
    nested = tmp_path / "nested"
    nested.mkdir()
    _touch(nested / "hidden.pbf")

    assert get_osm_files(tmp_path) == []


def test_accepts_string_directory(tmp_path):
    expected = _touch(tmp_path / "map.pbf")

    assert get_osm_files(str(tmp_path)) == [expected]


def test_missing_directory_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        get_osm_files(tmp_path / "does-not-exist")