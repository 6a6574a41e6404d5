"""
Ages and points in time.

`TimeElement` is a tagged union: it holds exactly one of `Age`,
`AgeRange`, `GestationalAge`, `OntologyClass`, `Timestamp` or `TimeInterval`,
and `kind` tells read sites which one without isinstance chains.
"""

import re
import typing

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum, auto

from .errors import MalformedDurationError
from .ontology import OntologyClass

# PnYnMnWnDTnHnMnS, every component optional but at least one present
_ISO8601_DURATION = re.compile(
    r"""
    ^P(?!$)
    (?:\d+Y)?
    (?:\d+M)?
    (?:\d+W)?
    (?:\d+D)?
    (?:T(?=\d)(?:\d+H)?(?:\d+M)?(?:\d+(?:\.\d+)?S)?)?
    $
    """,
    re.VERBOSE,
)

_NANOS_PER_SECOND = 1_000_000_000
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
# 0001-01-01T00:00:00Z and 9999-12-31T23:59:59Z, the range of google.protobuf.Timestamp
_MIN_SECONDS = -62_135_596_800
_MAX_SECONDS = 253_402_300_799


def check_iso8601_duration(value: str) -> str:
    """Return `value` unchanged if it is an ISO-8601 duration, else raise MalformedDurationError."""
    if not isinstance(value, str) or not _ISO8601_DURATION.match(value):
        raise MalformedDurationError(value)
    return value


@dataclass(frozen=True)
class Age:
    """
    Age of an individual as an ISO-8601 duration.

    Attributes:
        iso8601duration: e.g. 'P52Y2M' (52 years, 2 months) or 'P14Y'.
    """

    iso8601duration: str

    def __post_init__(self):
        check_iso8601_duration(self.iso8601duration)


@dataclass(frozen=True)
class AgeRange:
    start: Age
    end: Age


@dataclass(frozen=True)
class GestationalAge:
    """Gestational age in completed weeks plus days (0-6)."""

    weeks: int
    days: int = 0

    def __post_init__(self):
        if not isinstance(self.weeks, int) or self.weeks < 0:
            raise ValueError(f"weeks must be a non-negative integer, got {self.weeks!r}")
        if not isinstance(self.days, int) or not 0 <= self.days < 7:
            raise ValueError(f"days must be an integer in [0, 6], got {self.days!r}")


@dataclass(frozen=True)
class Timestamp:
    """
    An absolute point in time as seconds and nanoseconds since the UNIX epoch (UTC).
    """

    seconds: int
    nanos: int = 0

    def __post_init__(self):
        if not isinstance(self.seconds, int):
            raise ValueError(f"seconds must be an integer, got {self.seconds!r}")
        if not _MIN_SECONDS <= self.seconds <= _MAX_SECONDS:
            raise ValueError(f"seconds {self.seconds} outside [{_MIN_SECONDS}, {_MAX_SECONDS}]")
        if not isinstance(self.nanos, int) or not 0 <= self.nanos < _NANOS_PER_SECOND:
            raise ValueError(f"nanos must be an integer in [0, 1e9), got {self.nanos!r}")

    @classmethod
    def from_datetime(cls, value: datetime) -> "Timestamp":
        # naive datetimes are taken as UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        delta = value - _EPOCH
        seconds = delta.days * 86400 + delta.seconds
        return cls(seconds=seconds, nanos=delta.microseconds * 1000)

    @classmethod
    def from_iso8601(cls, value: str) -> "Timestamp":
        """
        Parse an RFC 3339 / ISO-8601 date-time such as '1964-03-15T00:00:00Z'.
        """
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise ValueError(f"Invalid ISO-8601 timestamp: {value!r}") from e
        return cls.from_datetime(parsed)

    def to_datetime(self) -> datetime:
        return _EPOCH + timedelta(seconds=self.seconds, microseconds=self.nanos // 1000)


@dataclass(frozen=True)
class TimeInterval:
    start: Timestamp
    end: Timestamp

    def __post_init__(self):
        if (self.end.seconds, self.end.nanos) < (self.start.seconds, self.start.nanos):
            raise ValueError("TimeInterval end precedes start")


class TimeElementKind(Enum):
    AGE = auto()
    AGE_RANGE = auto()
    GESTATIONAL_AGE = auto()
    ONTOLOGY_CLASS = auto()
    TIMESTAMP = auto()
    INTERVAL = auto()


Element = typing.Union[Age, AgeRange, GestationalAge, OntologyClass, Timestamp, TimeInterval]

_KINDS = {
    Age: TimeElementKind.AGE,
    AgeRange: TimeElementKind.AGE_RANGE,
    GestationalAge: TimeElementKind.GESTATIONAL_AGE,
    OntologyClass: TimeElementKind.ONTOLOGY_CLASS,
    Timestamp: TimeElementKind.TIMESTAMP,
    TimeInterval: TimeElementKind.INTERVAL,
}


@dataclass(frozen=True)
class TimeElement:
    """
    When something happened: an age, an age range, a gestational age, an
    ontology-coded onset (e.g. HP:0011461 'Fetal onset'), a timestamp or an interval.
    """

    element: Element

    def __post_init__(self):
        if type(self.element) not in _KINDS:
            raise TypeError(
                f"TimeElement cannot hold {type(self.element).__name__}; "
                f"expected one of {', '.join(t.__name__ for t in _KINDS)}"
            )

    @property
    def kind(self) -> TimeElementKind:
        return _KINDS[type(self.element)]

    @classmethod
    def of_age(cls, iso8601duration: str) -> "TimeElement":
        return cls(Age(iso8601duration))

    @classmethod
    def of_ontology_class(cls, term: OntologyClass) -> "TimeElement":
        return cls(term)

    @classmethod
    def of_timestamp(cls, value: typing.Union[Timestamp, datetime, str]) -> "TimeElement":
        if isinstance(value, datetime):
            value = Timestamp.from_datetime(value)
        elif isinstance(value, str):
            value = Timestamp.from_iso8601(value)
        return cls(value)
