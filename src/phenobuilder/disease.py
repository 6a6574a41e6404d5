"""
Disease domain model.

Defines the Disease dataclass for diagnoses (or explicitly excluded diagnoses).
"""

import typing

from dataclasses import dataclass

from .builder import Builder, freeze
from .ontology import OntologyClass
from .time_element import TimeElement


@dataclass(frozen=True)
class Disease:
    """
    Represents a disease entry for a patient.

    Attributes:
        term: Disease term (e.g. 'NCIT:C39853' or 'OMIM:158810').
        excluded: True if the disease was ruled out.
        onset: Age or time at onset.
        resolution: Age or time the disease resolved.
        disease_stage: Stage terms, e.g. cancer stage.
        clinical_tnm_finding: TNM findings (e.g. NCIT:C48766 'pT2b Stage Finding').
        primary_site: Anatomical site of origin.
        laterality: Side of the body affected.
    """

    term: OntologyClass
    excluded: bool = False
    onset: typing.Optional[TimeElement] = None
    resolution: typing.Optional[TimeElement] = None
    disease_stage: typing.Tuple[OntologyClass, ...] = ()
    clinical_tnm_finding: typing.Tuple[OntologyClass, ...] = ()
    primary_site: typing.Optional[OntologyClass] = None
    laterality: typing.Optional[OntologyClass] = None

    def __post_init__(self):
        if not isinstance(self.excluded, bool):
            raise ValueError(f"excluded must be a boolean, got {type(self.excluded).__name__}")
        freeze(self, "disease_stage", "clinical_tnm_finding")

    @staticmethod
    def builder() -> "DiseaseBuilder":
        return DiseaseBuilder()


class DiseaseBuilder(Builder[Disease]):
    entity = "Disease"
    required = ("term",)

    def _value_type(self):
        return Disease

    def set_term(self, value: OntologyClass) -> "DiseaseBuilder":
        return self._set("term", value)

    def set_excluded(self, value: bool) -> "DiseaseBuilder":
        return self._set("excluded", value)

    def set_onset(self, value: TimeElement) -> "DiseaseBuilder":
        return self._set("onset", value)

    def set_resolution(self, value: TimeElement) -> "DiseaseBuilder":
        return self._set("resolution", value)

    def add_disease_stage(self, value: OntologyClass) -> "DiseaseBuilder":
        return self._add("disease_stage", value)

    def add_clinical_tnm_finding(self, value: OntologyClass) -> "DiseaseBuilder":
        return self._add("clinical_tnm_finding", value)

    def set_primary_site(self, value: OntologyClass) -> "DiseaseBuilder":
        return self._set("primary_site", value)

    def set_laterality(self, value: OntologyClass) -> "DiseaseBuilder":
        return self._set("laterality", value)
