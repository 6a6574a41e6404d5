"""
Error types raised by phenobuilder.

Construction errors fail fast on a single object. Container validation is
batched, so `ValidationError` carries every violation found in one pass.
"""

import typing


class PhenobuilderError(Exception):
    """Base class for all errors raised by this package."""


class MissingRequiredFieldError(PhenobuilderError, ValueError):
    """Raised by `build()` when a required field was never set."""

    def __init__(self, entity: str, field: str):
        super().__init__(f"{entity}.{field} is required")
        self.entity = entity
        self.field = field


class MalformedDurationError(PhenobuilderError, ValueError):
    """Raised when an age string is not an ISO-8601 duration (e.g. `P52Y2M`)."""

    def __init__(self, value: str):
        super().__init__(f"Malformed ISO-8601 duration: {value!r}")
        self.value = value


class ValidationError(PhenobuilderError):
    """
    Raised when a container fails cross-reference validation.

    Attributes:
        violations: every problem found, in the order the audit reported them.
    """

    def __init__(self, violations: typing.Sequence[str]):
        self.violations = list(violations)
        lines = "\n".join(f"- {v}" for v in self.violations)
        super().__init__(f"{len(self.violations)} validation error(s):\n{lines}")


class UnknownNamespaceError(ValidationError):
    """Raised when ontology CURIEs use prefixes not declared in MetaData.resources."""

    def __init__(self, curies: typing.Sequence[str]):
        self.curies = list(curies)
        super().__init__(
            [f"CURIE {c!r} uses a namespace not declared in metaData.resources" for c in self.curies]
        )


class DecodeError(PhenobuilderError):
    """Raised when bytes or JSON text cannot be decoded into a valid value."""
