"""Exception types raised by kd_segments."""


class KdSegmentsError(Exception):
    """Base class for all kd_segments errors."""


class GeometryError(KdSegmentsError, ValueError):
    """Raised when a geometric computation cannot produce finite coordinates."""
