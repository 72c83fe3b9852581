"""Error taxonomy shared by the resource client and the screen engine."""

from __future__ import annotations


class RecordsTuiError(Exception):
    """Base class for every error the client surfaces to the operator."""


class TransportError(RecordsTuiError):
    """The request never produced an HTTP response (connection, timeout, DNS)."""


class RemoteError(RecordsTuiError):
    """The server answered with a non-success status code."""

    def __init__(self, message: str, status_code: int | None = None, code: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code


class SerializationError(RecordsTuiError):
    """A payload could not be encoded to or decoded from JSON."""


class ValidationError(RecordsTuiError):
    """A required text field was submitted empty."""


class NoDataError(RecordsTuiError):
    """Navigation was attempted on an empty page."""

    def __init__(self, message: str = "list must contain at least one row of data") -> None:
        super().__init__(message)


class StructuralError(RecordsTuiError):
    """A screen was composed with the wrong number of interactive elements."""


class NoInteractiveElementError(StructuralError):
    def __init__(self) -> None:
        super().__init__("screen creation failed: no interactive element found")


class MultipleInteractiveElementsError(StructuralError):
    def __init__(self) -> None:
        super().__init__("screen creation failed: multiple interactive elements found")
