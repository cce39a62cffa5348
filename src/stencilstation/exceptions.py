"""Exception hierarchy for Stencil Station."""


class StencilStationError(Exception):
    """Base exception for all Stencil Station errors."""

    pass


class ConfigurationError(StencilStationError):
    """Rejected configuration."""

    pass


class DegenerateAxisError(ConfigurationError, ZeroDivisionError):
    """Coordinate axis with zero width."""

    def __init__(self, minimum: float, maximum: float) -> None:
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"Degenerate axis [{minimum}, {maximum}]: bounds must differ"
        )


class PenProfileError(ConfigurationError):
    """Invalid pen profile or catalog selection."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid pen profile '{name}': {reason}")


class GeometryError(StencilStationError):
    """Errors in geometric construction."""

    pass


class ConstructionError(GeometryError):
    """Generated geometry cannot be handed to the boolean stage."""

    def __init__(self, part: str, reason: str) -> None:
        self.part = part
        self.reason = reason
        super().__init__(f"Cannot construct '{part}': {reason}")


class CurveEvaluationError(GeometryError):
    """No sample of a parametric curve could be evaluated."""

    def __init__(self, curve_name: str, steps: int) -> None:
        self.curve_name = curve_name
        self.steps = steps
        super().__init__(
            f"Curve '{curve_name}' produced no finite samples in {steps} steps"
        )


class SvgImportError(StencilStationError):
    """Error importing an SVG outline file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to import SVG '{path}': {reason}")


class ExportError(StencilStationError):
    """Error writing a mesh file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to export '{path}': {reason}")
