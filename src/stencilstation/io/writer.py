"""Mesh writer for exporting parts as STL files."""

from pathlib import Path

import trimesh

from stencilstation.exceptions import ExportError


class MeshWriter:
    """Writes built parts to an output directory.

    Each part becomes ``{prefix}-{name}.stl``.

    Example:
        writer = MeshWriter(Path("out"))
        paths = writer.write(parts, prefix="station")
    """

    def __init__(self, output_dir: Path, file_type: str = "stl") -> None:
        """Initialize the writer.

        Args:
            output_dir: Directory receiving the files (created if missing)
            file_type: trimesh export format
        """
        self._output_dir = output_dir
        self._file_type = file_type

    def path_for(self, name: str, prefix: str = "") -> Path:
        """Output path for a part name."""
        stem = f"{prefix}-{name}" if prefix else name
        return self._output_dir / f"{stem}.{self._file_type}"

    def write(self, parts: dict[str, trimesh.Trimesh], prefix: str = "") -> list[Path]:
        """Export every part.

        Args:
            parts: Meshes keyed by part name
            prefix: Optional file name prefix

        Returns:
            Paths written, in part order

        Raises:
            ExportError: If the directory or a file cannot be written
        """
        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ExportError(str(self._output_dir), str(e)) from e

        written: list[Path] = []
        for name, mesh in parts.items():
            path = self.path_for(name, prefix)
            try:
                mesh.export(str(path), file_type=self._file_type)
            except (OSError, ValueError) as e:
                raise ExportError(str(path), str(e)) from e
            written.append(path)
        return written
