"""Base plate, top frame and stencil blank.

All parts are centred on the origin with their bottom face at z = 0. Plate
outlines are composed in 2D with shapely and extruded; magnet sockets are
then cut in 3D.

The stencil insert sits in the frame opening. An alignment tab on each
opening edge engages a notch centred on each insert edge, so inserts can
only be seated square. Magnets in the frame underside and the base plate
top face hold the stack together.
"""

import trimesh
from shapely.geometry import Polygon, box
from shapely.ops import unary_union

from stencilstation.config import PlateConfig, StationSettings
from stencilstation.core.solids import cylinder, difference, extrude, mirror_quadrants


class PlateBuilder:
    """Builds the plates shared by every stencil station.

    Example:
        plates = PlateBuilder(settings)
        base = plates.base_plate()
    """

    def __init__(self, settings: StationSettings) -> None:
        self.settings = settings
        self.plate: PlateConfig = settings.plate
        self.sections = settings.render.facets

    def stencil_outline(self) -> Polygon:
        """Insert outline: margin around the window, one notch per edge."""
        p = self.plate
        half_w = p.stencil_width / 2
        half_h = p.stencil_height / 2
        notch_half = p.tab_width / 2 + p.fit_clearance
        notch_depth = p.tab_depth + p.fit_clearance
        overshoot = p.cut_tolerance

        notches = [
            box(half_w - notch_depth, -notch_half, half_w + overshoot, notch_half),
            box(-half_w - overshoot, -notch_half, -half_w + notch_depth, notch_half),
            box(-notch_half, half_h - notch_depth, notch_half, half_h + overshoot),
            box(-notch_half, -half_h - overshoot, notch_half, -half_h + notch_depth),
        ]
        return box(-half_w, -half_h, half_w, half_h).difference(unary_union(notches))

    def frame_outline(self) -> Polygon:
        """Frame outline: border around an opening that fits the insert, with tabs."""
        p = self.plate
        half_w = p.frame_width / 2
        half_h = p.frame_height / 2
        open_w = p.stencil_width / 2 + p.fit_clearance
        open_h = p.stencil_height / 2 + p.fit_clearance
        tab_half = p.tab_width / 2
        # tabs overlap the border slightly so the union is one piece
        overlap = p.cut_tolerance

        tabs = [
            box(open_w - p.tab_depth, -tab_half, open_w + overlap, tab_half),
            box(-open_w - overlap, -tab_half, -open_w + p.tab_depth, tab_half),
            box(-tab_half, open_h - p.tab_depth, tab_half, open_h + overlap),
            box(-tab_half, -open_h - overlap, tab_half, -open_h + p.tab_depth),
        ]
        ring = box(-half_w, -half_h, half_w, half_h).difference(
            box(-open_w, -open_h, open_w, open_h)
        )
        return unary_union([ring, *tabs])

    def _magnet_socket(self, z: float) -> list[trimesh.Trimesh]:
        p = self.plate
        x = p.frame_width / 2 - p.border_width / 2
        y = p.frame_height / 2 - p.border_width / 2
        return [
            cylinder(
                radius=(p.magnet_diameter + p.fit_clearance) / 2,
                height=p.magnet_thickness + p.fit_clearance + p.cut_tolerance,
                center=(x, y),
                z=z,
                sections=self.sections,
            )
        ]

    def magnet_sockets(self, z: float) -> list[trimesh.Trimesh]:
        """Four corner magnet sockets with their bottom face at z."""
        return mirror_quadrants(self._magnet_socket)(z)

    def stencil_blank(self) -> trimesh.Trimesh:
        """Uncut stencil insert."""
        return extrude(self.stencil_outline(), self.plate.plate_thickness)

    def window_prism(self) -> trimesh.Trimesh:
        """Window footprint through the full insert thickness (plus tolerance)."""
        p = self.plate
        tol = p.cut_tolerance
        window = box(
            -p.window_width / 2, -p.window_height / 2, p.window_width / 2, p.window_height / 2
        )
        return extrude(window, p.plate_thickness + 2 * tol, z=-tol)

    def top_frame(self) -> trimesh.Trimesh:
        """Frame with tabs and magnet sockets in its underside."""
        p = self.plate
        frame = extrude(self.frame_outline(), p.plate_thickness)
        return difference(frame, self.magnet_sockets(z=-p.cut_tolerance))

    def base_plate(self) -> trimesh.Trimesh:
        """Solid base with magnet sockets in its top face."""
        p = self.plate
        base = extrude(
            box(-p.frame_width / 2, -p.frame_height / 2, p.frame_width / 2, p.frame_height / 2),
            p.base_thickness,
        )
        socket_z = p.base_thickness - p.magnet_thickness - p.fit_clearance
        return difference(base, self.magnet_sockets(z=socket_z))
