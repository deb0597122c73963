"""Errors raised while reading DNS settings from annotations."""
from __future__ import annotations


class AnnotationError(ValueError):
    """Base class for invalid or missing annotation values.

    Attributes:
        key: Annotation key the error refers to.
        value: Raw annotation value, or None when the key is absent.
        service: Name of the owning service, when known.
    """

    def __init__(self, message: str, key: str, value: str | None = None, service: str | None = None) -> None:
        super().__init__(message)
        self.key = key
        self.value = value
        self.service = service


class MissingAnnotationError(AnnotationError):
    """A required annotation is absent."""


class AnnotationParseError(AnnotationError):
    """An annotation is present but is not a number or duration."""


class AnnotationRangeError(AnnotationError):
    """An annotation parsed but lies outside its accepted interval.

    Attributes:
        minimum: Lowest accepted value.
        maximum: Highest accepted value.
    """

    def __init__(
        self,
        message: str,
        key: str,
        value: str | None,
        minimum: int,
        maximum: int,
        service: str | None = None,
    ) -> None:
        super().__init__(message, key, value, service)
        self.minimum = minimum
        self.maximum = maximum
