"""Exceptions raised by resource handlers and API client adapters."""

from collections.abc import Iterable

from .models import ResponseError


class NewRelicError(Exception):
    """Base class for every error surfaced by relicform."""


class NotFoundError(NewRelicError):
    """The requested object does not exist on the remote side."""


class NerdGraphError(NewRelicError):
    """NerdGraph answered with top-level GraphQL errors."""

    def __init__(self, messages: Iterable[str]):
        self.messages = tuple(messages)
        super().__init__("; ".join(self.messages) or "unknown NerdGraph error")


class APIError(NewRelicError):
    """A REST endpoint answered with an unexpected status code."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(f"{status_code}: {message}")


class ResponseErrorsError(NewRelicError):
    """A mutation payload carried typed errors."""

    def __init__(self, errors: Iterable[ResponseError]):
        self.errors = tuple(errors)
        super().__init__("; ".join(str(e) for e in self.errors))


class ConfigValidationError(NewRelicError):
    """Resource configuration failed schema or cross-attribute checks."""

    def __init__(self, problems: Iterable[str]):
        self.problems = tuple(problems)
        super().__init__("; ".join(self.problems))


__all__ = [
    "APIError",
    "ConfigValidationError",
    "NerdGraphError",
    "NewRelicError",
    "NotFoundError",
    "ResponseErrorsError",
]
