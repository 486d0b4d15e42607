"""Error types shared by services, handlers and routes."""
from enum import Enum


class ErrorKind(str, Enum):
    """Failure categories; the API layer maps each one to a status code."""
    VALIDATION = "validation"
    UPSTREAM = "upstream"
    INTERNAL = "internal"


class AllieError(Exception):
    """Base class for errors raised by Allie services."""
    kind: ErrorKind = ErrorKind.INTERNAL


class ProviderError(AllieError):
    """A third-party data provider failed or returned an unusable payload."""
    kind = ErrorKind.UPSTREAM


class LLMServiceError(AllieError):
    """The language model (completion or transcription) call failed."""
    kind = ErrorKind.UPSTREAM


class ScheduleStoreError(AllieError):
    """The schedule document store could not be read or written."""
    kind = ErrorKind.INTERNAL
