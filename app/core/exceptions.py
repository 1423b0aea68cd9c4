"""
Engine error taxonomy.

- :class:`InsufficientDataError`: a detector lacks qualifying samples.  It is
  caught by the detection entry points: the trend is skipped, the run goes on.
- :class:`InvalidBenchmarkError`: FTP / LTHR outside the accepted range.
  Raised before any zone or progression state is touched.
- :class:`StateConsistencyError`: a write would create a second current
  benchmark or a second active trend for the same key.

A missing :class:`~app.models.adaptation_settings.AdaptationSettings` row is
not an error: the settings service falls back to documented defaults.
"""

from typing import Any, Optional


class EngineError(Exception):
    """Base class for errors surfaced by the engine."""

    def __init__(self, message: str, athlete_id: Optional[int] = None):
        self.athlete_id = athlete_id
        self.message = message
        super().__init__(f"[athlete {athlete_id}] {message}" if athlete_id is not None else message)


class InsufficientDataError(EngineError):
    """Not enough qualifying samples to infer a trend."""

    def __init__(self, message: str, athlete_id: Optional[int] = None, samples: int = 0, required: int = 0):
        self.samples = samples
        self.required = required
        super().__init__(message, athlete_id)


class InvalidBenchmarkError(EngineError):
    """FTP or LTHR outside the declared numeric range."""

    def __init__(self, field: str, value: Any, athlete_id: Optional[int] = None, allowed: str = ""):
        self.field = field
        self.value = value
        super().__init__(f"invalid {field}={value!r} (allowed {allowed})", athlete_id)


class StateConsistencyError(EngineError):
    """A mutation would violate a single-current / single-active invariant."""
