"""
Phenotypic feature domain model.

A PhenotypicFeature is one clinical observation: an ontology term (usually
HPO or NCIT), whether it was observed or explicitly ruled out, and optional
onset, severity, modifiers and supporting evidence.
"""

import typing

from dataclasses import dataclass

from .builder import Builder, freeze
from .evidence import Evidence
from .ontology import OntologyClass
from .time_element import TimeElement


@dataclass(frozen=True)
class PhenotypicFeature:
    """
    Attributes:
        type: The observed (or excluded) phenotype, e.g. HP:0001558.
        negated: True if the feature was looked for and found absent. Serialized as
            the proto3 `excluded` bool, so an explicit False and an unset value are
            the same state and both decode as False.
        severity: e.g. HP:0012825 'Mild'.
        onset: When the feature was first observed.
        resolution: When the feature resolved, if it did.
        description: Free-text note.
        modifiers: Qualifiers such as HP:0031796 'Recurrent'. Duplicates are dropped,
            first occurrence wins.
        evidence: Supporting evidence, in display order.
    """

    type: OntologyClass
    negated: bool = False
    severity: typing.Optional[OntologyClass] = None
    onset: typing.Optional[TimeElement] = None
    resolution: typing.Optional[TimeElement] = None
    description: str = ""
    modifiers: typing.Tuple[OntologyClass, ...] = ()
    evidence: typing.Tuple[Evidence, ...] = ()

    def __post_init__(self):
        if not isinstance(self.negated, bool):
            raise ValueError(f"negated must be a boolean, got {type(self.negated).__name__}")
        object.__setattr__(self, "modifiers", tuple(dict.fromkeys(self.modifiers)))
        freeze(self, "evidence")

    @staticmethod
    def builder() -> "PhenotypicFeatureBuilder":
        return PhenotypicFeatureBuilder()


class PhenotypicFeatureBuilder(Builder[PhenotypicFeature]):
    entity = "PhenotypicFeature"
    required = ("type",)

    def _value_type(self):
        return PhenotypicFeature

    def set_type(self, value: OntologyClass) -> "PhenotypicFeatureBuilder":
        return self._set("type", value)

    def set_negated(self, value: bool) -> "PhenotypicFeatureBuilder":
        return self._set("negated", value)

    def set_severity(self, value: OntologyClass) -> "PhenotypicFeatureBuilder":
        return self._set("severity", value)

    def set_onset(self, value: TimeElement) -> "PhenotypicFeatureBuilder":
        return self._set("onset", value)

    def set_resolution(self, value: TimeElement) -> "PhenotypicFeatureBuilder":
        return self._set("resolution", value)

    def set_description(self, value: str) -> "PhenotypicFeatureBuilder":
        return self._set("description", value)

    def add_modifier(self, value: OntologyClass) -> "PhenotypicFeatureBuilder":
        return self._add("modifiers", value)

    def add_all_modifiers(self, values: typing.Iterable[OntologyClass]) -> "PhenotypicFeatureBuilder":
        return self._add_all("modifiers", values)

    def add_evidence(self, value: Evidence) -> "PhenotypicFeatureBuilder":
        return self._add("evidence", value)

    def add_all_evidence(self, values: typing.Iterable[Evidence]) -> "PhenotypicFeatureBuilder":
        return self._add_all("evidence", values)
