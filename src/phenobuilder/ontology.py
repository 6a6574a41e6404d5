"""
Ontology references.

`OntologyClass` identifies a concept in an external ontology by CURIE and
label. `Resource` declares one such ontology for a container; every CURIE
prefix used inside a container must be declared by one of its resources.
"""

import re
import typing

from dataclasses import dataclass

from .builder import Builder

# namespace:code, e.g. "HP:0001558", "NCIT:C39853", "PMID:30808312"
_CURIE_PATTERN = re.compile(r"^(?P<prefix>[A-Za-z][A-Za-z0-9_.\-]*):(?P<code>\S+)$")


def curie_prefix(curie: str) -> typing.Optional[str]:
    """
    Return the namespace prefix of a CURIE, or None if `curie` is not one.

    Examples:
        "HP:0001558" -> "HP"
        "UBERON_0001256" -> None
    """
    m = _CURIE_PATTERN.match(curie or "")
    return m.group("prefix") if m else None


@dataclass(frozen=True)
class OntologyClass:
    """
    A concept in an external ontology.

    Attributes:
        id: CURIE of the concept (e.g. 'HP:0001558').
        label: Human-readable name of the concept (e.g. 'Decreased fetal movement').
    """

    id: str
    label: str = ""

    @property
    def prefix(self) -> typing.Optional[str]:
        return curie_prefix(self.id)

    @staticmethod
    def builder() -> "OntologyClassBuilder":
        return OntologyClassBuilder()

    def __str__(self) -> str:
        return f"{self.label} ({self.id})" if self.label else self.id


def ontology_class(id: str, label: str) -> OntologyClass:
    """
    Build an OntologyClass from an id/label pair.

    No lookup happens here; the pair is trusted. Use
    `phenobuilder.validation.check_namespaces` or `phenobuilder.hpo.audit_hpo_terms`
    to check references after the container is assembled.
    """
    return OntologyClass.builder().set_id(id).set_label(label).build()


class OntologyClassBuilder(Builder[OntologyClass]):
    entity = "OntologyClass"
    required = ("id", "label")

    def _value_type(self):
        return OntologyClass

    def set_id(self, value: str) -> "OntologyClassBuilder":
        return self._set("id", value)

    def set_label(self, value: str) -> "OntologyClassBuilder":
        return self._set("label", value)


@dataclass(frozen=True)
class Resource:
    """
    An ontology or vocabulary referenced by CURIEs in a container.

    Attributes:
        id: Short identifier of the resource (e.g. 'hp').
        namespace_prefix: CURIE prefix the resource owns (e.g. 'HP').
        name: Full name (e.g. 'human phenotype ontology').
        url: Location of the resource (e.g. 'http://purl.obolibrary.org/obo/hp.owl').
        version: Release of the resource used.
        iri_prefix: IRI that, joined with the CURIE code, resolves a term.
    """

    id: str
    namespace_prefix: str
    name: str = ""
    url: str = ""
    version: str = ""
    iri_prefix: str = ""

    @staticmethod
    def builder() -> "ResourceBuilder":
        return ResourceBuilder()


class ResourceBuilder(Builder[Resource]):
    entity = "Resource"
    required = ("id", "namespace_prefix")

    def _value_type(self):
        return Resource

    def set_id(self, value: str) -> "ResourceBuilder":
        return self._set("id", value)

    def set_name(self, value: str) -> "ResourceBuilder":
        return self._set("name", value)

    def set_namespace_prefix(self, value: str) -> "ResourceBuilder":
        return self._set("namespace_prefix", value)

    def set_url(self, value: str) -> "ResourceBuilder":
        return self._set("url", value)

    def set_version(self, value: str) -> "ResourceBuilder":
        return self._set("version", value)

    def set_iri_prefix(self, value: str) -> "ResourceBuilder":
        return self._set("iri_prefix", value)
