"""Exception hierarchy for curveforge."""


class CurveForgeError(Exception):
    """Base exception for all curveforge errors."""

    pass


class InputError(CurveForgeError):
    """Errors related to reading caller-supplied input."""

    pass


class PointFileError(InputError):
    """Error loading a point list from disk."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read points from '{path}': {reason}")


class InvalidGeometry(CurveForgeError):
    """Geometry that cannot be fitted or queried."""

    pass


class InsufficientPoints(InvalidGeometry):
    """Too few points for the requested operation."""

    def __init__(self, count: int, required: int = 2, what: str = "distinct points") -> None:
        self.count = count
        self.required = required
        super().__init__(f"Expected at least {required} {what}, got {count}")


class InvalidParameter(InvalidGeometry):
    """A parameter outside the range an operation accepts."""

    def __init__(self, name: str, value: object, reason: str) -> None:
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {name}={value!r}: {reason}")


class DegenerateGeometry(InvalidGeometry):
    """Zero-length or otherwise collapsed geometry."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ContourError(InvalidGeometry):
    """Error with contour data or operations."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
