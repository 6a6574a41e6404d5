"""
Biosample domain model.

Defines the Biosample dataclass for specimens collected from an individual.
`individual_id` is a plain identifier; whether it names a known individual is
checked by `phenobuilder.validation`, not here.
"""

import typing

from dataclasses import dataclass

from .builder import Builder, freeze
from .ontology import OntologyClass
from .phenotypic_feature import PhenotypicFeature
from .time_element import TimeElement


@dataclass(frozen=True)
class Biosample:
    """
    Represents a biosample taken from an individual.

    Attributes:
        id: Unique identifier for the biosample (e.g. 'sample1').
        type: Sampled tissue (e.g. 'UBERON:0001256' wall of urinary bladder).
        individual_id: Id of the individual the sample was taken from.
        age_at_collection: Age or time of collection (e.g. P52Y2M).
        description: Free-text note.
        sample_type: Kind of material (e.g. EFO:0009655 'abnormal sample').
        histological_diagnosis: Diagnosis made on the sample.
        tumor_progression: e.g. NCIT:C84509 'Primary Malignant Neoplasm'.
        phenotypic_features: Findings on the sample, in insertion order.
    """

    id: str
    type: OntologyClass
    individual_id: str = ""
    age_at_collection: typing.Optional[TimeElement] = None
    description: str = ""
    sample_type: typing.Optional[OntologyClass] = None
    histological_diagnosis: typing.Optional[OntologyClass] = None
    tumor_progression: typing.Optional[OntologyClass] = None
    phenotypic_features: typing.Tuple[PhenotypicFeature, ...] = ()

    def __post_init__(self):
        freeze(self, "phenotypic_features")

    @staticmethod
    def builder() -> "BiosampleBuilder":
        return BiosampleBuilder()


class BiosampleBuilder(Builder[Biosample]):
    entity = "Biosample"
    required = ("id", "type")

    def _value_type(self):
        return Biosample

    def set_id(self, value: str) -> "BiosampleBuilder":
        return self._set("id", value)

    def set_type(self, value: OntologyClass) -> "BiosampleBuilder":
        return self._set("type", value)

    def set_individual_id(self, value: str) -> "BiosampleBuilder":
        return self._set("individual_id", value)

    def set_age_at_collection(self, value: TimeElement) -> "BiosampleBuilder":
        return self._set("age_at_collection", value)

    def set_description(self, value: str) -> "BiosampleBuilder":
        return self._set("description", value)

    def set_sample_type(self, value: OntologyClass) -> "BiosampleBuilder":
        return self._set("sample_type", value)

    def set_histological_diagnosis(self, value: OntologyClass) -> "BiosampleBuilder":
        return self._set("histological_diagnosis", value)

    def set_tumor_progression(self, value: OntologyClass) -> "BiosampleBuilder":
        return self._set("tumor_progression", value)

    def add_phenotypic_feature(self, value: PhenotypicFeature) -> "BiosampleBuilder":
        return self._add("phenotypic_features", value)

    def add_all_phenotypic_features(self, values: typing.Iterable[PhenotypicFeature]) -> "BiosampleBuilder":
        return self._add_all("phenotypic_features", values)
