"""Unit tests for MeshWriter."""

from pathlib import Path

import pytest
import trimesh

from stencilstation.core.solids import slab
from stencilstation.exceptions import ExportError
from stencilstation.io import MeshWriter


class TestMeshWriter:
    """Tests for MeshWriter."""

    def test_path_for(self, tmp_path: Path) -> None:
        writer = MeshWriter(tmp_path)
        assert writer.path_for("rose", "station") == tmp_path / "station-rose.stl"
        assert writer.path_for("rose") == tmp_path / "rose.stl"

    def test_write_creates_directory(self, tmp_path: Path) -> None:
        out = tmp_path / "parts" / "nested"
        parts = {"a": slab(1.0, 2.0, 3.0), "b": slab(2.0, 2.0, 2.0)}
        paths = MeshWriter(out).write(parts, prefix="station")

        assert paths == [out / "station-a.stl", out / "station-b.stl"]
        loaded = trimesh.load(str(paths[0]))
        assert loaded.volume == pytest.approx(6.0)

    def test_unwritable_directory(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("not a directory", encoding="utf-8")
        with pytest.raises(ExportError):
            MeshWriter(blocker).write({"a": slab(1.0, 1.0, 1.0)})
