"""Error types raised by climb profile analysis and scene synthesis.

Validation errors subclass ValueError so callers that already guard
pure computations with ``except ValueError`` keep working. Transport
mapping (400 / 404 / 500) belongs to the caller.
"""


class ClimbProfilerError(Exception):
    """Base class for all climb_profiler errors."""


class InvalidProfileError(ClimbProfilerError, ValueError):
    """Elevation profile missing, shorter than 2 points, or not strictly increasing."""


class MissingGeodataError(ClimbProfilerError, ValueError):
    """Coordinates required for 3D synthesis are absent."""


class NotFoundError(ClimbProfilerError, LookupError):
    """A referenced pass or route id does not exist in the pass store."""

    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} '{entity_id}' not found")
