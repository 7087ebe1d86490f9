from typing import Optional


class SummaryError(Exception):
    """Base class for everything the summary pipeline raises on purpose."""


class InvalidSummaryRequest(SummaryError):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class ModelInvocationError(SummaryError):
    pass


class ResponseParseError(SummaryError):
    """The model reply could not be read as a JSON object."""

    def __init__(self, message: str, raw_text: str):
        super().__init__(message)
        self.raw_text = raw_text


class MissingCredentialError(SummaryError):
    pass


class ServiceRequestError(SummaryError):
    """The summary service answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
