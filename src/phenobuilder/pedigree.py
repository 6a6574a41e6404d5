"""
Pedigree domain model.

A Pedigree lists the members of a family. Parents are referenced by
individual id, not by object, so a Person never owns another Person; the
graph those ids form is checked for dangling references and cycles by
`phenobuilder.validation`.
"""

import typing

from dataclasses import dataclass
from enum import Enum, auto

from .builder import Builder, freeze
from .individual import Sex


class AffectedStatus(Enum):
    MISSING = auto()
    UNAFFECTED = auto()
    AFFECTED = auto()


@dataclass(frozen=True)
class Person:
    """
    One member of a pedigree.

    Attributes:
        individual_id: Id of the individual; should match a subject in the family.
        sex: Phenotypic sex.
        maternal_id: individual_id of the mother, if in the pedigree.
        paternal_id: individual_id of the father, if in the pedigree.
        affected_status: Whether the person is affected by the family's condition.
        family_id: Optional family identifier (PED column 1).
    """

    individual_id: str
    sex: Sex = Sex.UNKNOWN
    maternal_id: typing.Optional[str] = None
    paternal_id: typing.Optional[str] = None
    affected_status: AffectedStatus = AffectedStatus.MISSING
    family_id: str = ""

    def __post_init__(self):
        # "" and None are the same "no parent" on the wire
        for attr in ("maternal_id", "paternal_id"):
            if getattr(self, attr) == "":
                object.__setattr__(self, attr, None)

    @property
    def parent_ids(self) -> typing.Tuple[str, ...]:
        return tuple(p for p in (self.maternal_id, self.paternal_id) if p)

    @staticmethod
    def builder() -> "PersonBuilder":
        return PersonBuilder()


class PersonBuilder(Builder[Person]):
    entity = "Pedigree.Person"
    required = ("individual_id",)

    def _value_type(self):
        return Person

    def set_individual_id(self, value: str) -> "PersonBuilder":
        return self._set("individual_id", value)

    def set_sex(self, value: Sex) -> "PersonBuilder":
        return self._set("sex", value)

    def set_maternal_id(self, value: str) -> "PersonBuilder":
        return self._set("maternal_id", value)

    def set_paternal_id(self, value: str) -> "PersonBuilder":
        return self._set("paternal_id", value)

    def set_affected_status(self, value: AffectedStatus) -> "PersonBuilder":
        return self._set("affected_status", value)

    def set_family_id(self, value: str) -> "PersonBuilder":
        return self._set("family_id", value)


@dataclass(frozen=True)
class Pedigree:
    persons: typing.Tuple[Person, ...] = ()

    def __post_init__(self):
        freeze(self, "persons")

    def get_person(self, individual_id: str) -> typing.Optional[Person]:
        for person in self.persons:
            if person.individual_id == individual_id:
                return person
        return None

    @staticmethod
    def builder() -> "PedigreeBuilder":
        return PedigreeBuilder()


class PedigreeBuilder(Builder[Pedigree]):
    entity = "Pedigree"

    def _value_type(self):
        return Pedigree

    def add_person(self, value: Person) -> "PedigreeBuilder":
        return self._add("persons", value)

    def add_all_persons(self, values: typing.Iterable[Person]) -> "PedigreeBuilder":
        return self._add_all("persons", values)
