"""File I/O layer for stencilstation.

Key responsibilities:
- Import SVG outlines as shapely geometry (multi-part stencils)
- Fit imported outlines into the stencil window
- Export built parts as STL files

Key classes and functions:
- read_svg_outlines: Parse SVG shapes into polygons
- fit_outline: Scale SVG outlines into scene space
- MeshWriter: Save parts
"""

from stencilstation.io.svg_reader import fit_outline, read_svg_outlines
from stencilstation.io.writer import MeshWriter

__all__ = [
    "MeshWriter",
    "fit_outline",
    "read_svg_outlines",
]
