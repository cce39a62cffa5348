"""Core geometry for stencilstation.

This module contains the geometry pipeline:

- mapping: Conversions between virtual, scene and graph coordinates
- profile: Pen-track groove cross sections
- sweep: Parametric curve sampling and chord planning
- solids: Mesh primitives, transforms, booleans and mirror combinators
- tracks: Groove cutters (lines, circles, sockets, curves)
- plates: Base plate, top frame and stencil blank
- stencils: Stencil insert cutter sets
- builder: Generator selection and part assembly
"""

from stencilstation.core.builder import StationBuilder
from stencilstation.core.mapping import CoordinateMapper, coord_map
from stencilstation.core.plates import PlateBuilder
from stencilstation.core.profile import TrackProfile, bevel_height, track_profile
from stencilstation.core.stencils import StencilBuilder, graph_function
from stencilstation.core.sweep import ChordSegment, SweepPlan, plan_sweep, sample_curve
from stencilstation.core.tracks import TrackBuilder

__all__ = [
    "ChordSegment",
    "CoordinateMapper",
    "PlateBuilder",
    "StationBuilder",
    "StencilBuilder",
    "SweepPlan",
    "TrackBuilder",
    "TrackProfile",
    "bevel_height",
    "coord_map",
    "graph_function",
    "plan_sweep",
    "sample_curve",
    "track_profile",
]
