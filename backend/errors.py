"""
GreenTrack India: Error Taxonomy

  TransportError          network failure, non-2xx status or malformed payload
  NotFoundError           geocoder returned zero results
  DegradedDataError       optional enrichment unusable (becomes None upstream)
  LocationResolutionError user-facing abort of an enrichment request
"""


class GreenTrackError(Exception):
    """Base class for all pipeline errors."""


class TransportError(GreenTrackError):
    pass


class NotFoundError(GreenTrackError):
    pass


class DegradedDataError(GreenTrackError):
    pass


class LocationResolutionError(GreenTrackError):
    """Raised by the orchestrator when the submitted place cannot be geocoded."""

    def __init__(self, query: str, cause: GreenTrackError):
        self.query = query
        self.cause = cause
        super().__init__(f"Could not resolve location '{query}'")

    @property
    def not_found(self) -> bool:
        return isinstance(self.cause, NotFoundError)
