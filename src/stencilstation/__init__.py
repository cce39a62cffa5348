"""Stencil Station - Parametric 3D-printable drawing jigs.

Stencil Station generates the printable parts of a magnetic drawing jig: a
base plate with magnet sockets, a top frame that clamps interchangeable
stencil inserts, and the inserts themselves (graph grids, polar angle guides,
alignment markers, parametric curves and SVG-derived outlines). Every groove
is cut with a cross section matched to a specific pen tip.

Example:
    $ stencilstation build --generator graphing

This writes one STL file per part into the current directory.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
