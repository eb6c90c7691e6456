"""Exceptions raised by the turbulent field synthesis."""


class GeometryError(ValueError):
    """The grid geometry cannot resolve the requested turbulence band.

    The ``constraint`` attribute names the violated requirement: ``"cubic"``, ``"spacing"``,
    ``"lmin"``, ``"lmax"`` or ``"band"``.
    """

    def __init__(self, constraint: str, message: str):
        super().__init__(message)
        self.constraint = constraint


class AllocationError(MemoryError):
    """Allocation of the spectral coefficient buffers failed."""
