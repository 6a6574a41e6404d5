"""
Provenance for assertions: citations and evidence codes.
"""

import typing

from dataclasses import dataclass

from .builder import Builder
from .ontology import OntologyClass


@dataclass(frozen=True)
class ExternalReference:
    """
    A reference to something outside the container, usually a publication.

    Attributes:
        id: CURIE of the reference (e.g. 'PMID:30808312').
        reference: URL or other resolvable locator.
        description: Free text, e.g. the title of the publication.
    """

    id: str = ""
    reference: str = ""
    description: str = ""

    @staticmethod
    def builder() -> "ExternalReferenceBuilder":
        return ExternalReferenceBuilder()


class ExternalReferenceBuilder(Builder[ExternalReference]):
    entity = "ExternalReference"
    required = ("id",)

    def _value_type(self):
        return ExternalReference

    def set_id(self, value: str) -> "ExternalReferenceBuilder":
        return self._set("id", value)

    def set_reference(self, value: str) -> "ExternalReferenceBuilder":
        return self._set("reference", value)

    def set_description(self, value: str) -> "ExternalReferenceBuilder":
        return self._set("description", value)


@dataclass(frozen=True)
class Evidence:
    """
    Supports an assertion with an evidence code (ECO) and an optional citation.
    """

    evidence_code: OntologyClass
    reference: typing.Optional[ExternalReference] = None

    @staticmethod
    def builder() -> "EvidenceBuilder":
        return EvidenceBuilder()


class EvidenceBuilder(Builder[Evidence]):
    entity = "Evidence"
    required = ("evidence_code",)

    def _value_type(self):
        return Evidence

    def set_evidence_code(self, value: OntologyClass) -> "EvidenceBuilder":
        return self._set("evidence_code", value)

    def set_reference(self, value: ExternalReference) -> "EvidenceBuilder":
        return self._set("reference", value)
