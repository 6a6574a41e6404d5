"""
Individual domain model.

Defines the Sex enumeration and the Individual dataclass for the subject of a
phenopacket (a patient or one of their relatives).
"""

import typing

from dataclasses import dataclass
from enum import Enum, auto

from .builder import Builder, freeze
from .time_element import TimeElement, Timestamp


class Sex(Enum):
    """Phenotypic sex of an individual."""
    UNKNOWN = auto()
    FEMALE = auto()
    MALE = auto()
    OTHER = auto()


@dataclass(frozen=True)
class Individual:
    """
    Represents the subject of a phenopacket.

    Attributes:
        id: Identifier of the individual (e.g. 'patient1', '14 year-old boy').
        sex: Phenotypic sex.
        date_of_birth: Calendar date of birth.
        time_at_encounter: Age or time when the individual was last seen.
        alternate_ids: Other identifiers for the same individual.
    """

    id: str
    sex: Sex = Sex.UNKNOWN
    date_of_birth: typing.Optional[Timestamp] = None
    time_at_encounter: typing.Optional[TimeElement] = None
    alternate_ids: typing.Tuple[str, ...] = ()

    def __post_init__(self):
        if not isinstance(self.sex, Sex):
            raise ValueError(f"sex must be a Sex, got {self.sex!r}")
        freeze(self, "alternate_ids")

    @staticmethod
    def builder() -> "IndividualBuilder":
        return IndividualBuilder()


class IndividualBuilder(Builder[Individual]):
    entity = "Individual"
    required = ("id",)

    def _value_type(self):
        return Individual

    def set_id(self, value: str) -> "IndividualBuilder":
        return self._set("id", value)

    def set_sex(self, value: Sex) -> "IndividualBuilder":
        return self._set("sex", value)

    def set_date_of_birth(self, value: Timestamp) -> "IndividualBuilder":
        return self._set("date_of_birth", value)

    def set_time_at_encounter(self, value: TimeElement) -> "IndividualBuilder":
        return self._set("time_at_encounter", value)

    def add_alternate_id(self, value: str) -> "IndividualBuilder":
        return self._add("alternate_ids", value)
