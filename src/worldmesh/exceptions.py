"""Exceptions raised by the world grid square routines."""


class WorldMeshError(Exception):
    """Base class for all mesh code errors."""


class InvalidMeshCode(WorldMeshError, ValueError):
    """The mesh code cannot be parsed (too short, bad length or non-digits)."""

    def __init__(self, meshcode, reason: str):
        self.meshcode = meshcode
        self.reason = reason
        super().__init__(f"invalid mesh code {meshcode!r}: {reason}")


class InvalidDigit(WorldMeshError, ValueError):
    """A digit of the mesh code lies outside the range allowed at its position."""

    def __init__(self, meshcode, position: int, value: int, allowed: range):
        self.meshcode = meshcode
        self.position = position
        self.value = value
        self.allowed = allowed
        super().__init__(
            f"invalid digit {value} at position {position} of mesh code {meshcode!r} "
            f"(expected {allowed.start}-{allowed.stop - 1})"
        )


class ConvergenceError(WorldMeshError, ArithmeticError):
    """Vincenty's iteration did not converge (typically near-antipodal points)."""

    def __init__(self, iterations: int, delta: float):
        self.iterations = iterations
        self.delta = delta
        super().__init__(
            f"Vincenty iteration did not converge after {iterations} iterations "
            f"(last |dlambda| = {delta:.3e})"
        )
