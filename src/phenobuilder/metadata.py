"""
Container metadata: who created it, when, and which ontologies it references.
"""

import typing

from dataclasses import dataclass

from .builder import Builder
from .evidence import ExternalReference
from .ontology import Resource
from .time_element import Timestamp

SCHEMA_VERSION = "2.0"


@dataclass(frozen=True)
class MetaData:
    """
    Attributes:
        created: When the container was created.
        created_by: Person or tool that created it.
        submitted_by: Person or tool that submitted it, if different.
        resources: Ontologies referenced by the container, one per namespace prefix.
        external_references: Publications or other sources the data was taken from.
        phenopacket_schema_version: Schema version the container follows.
    """

    created: typing.Optional[Timestamp] = None
    created_by: str = ""
    submitted_by: str = ""
    resources: typing.Tuple[Resource, ...] = ()
    external_references: typing.Tuple[ExternalReference, ...] = ()
    phenopacket_schema_version: str = SCHEMA_VERSION

    def __post_init__(self):
        seen: dict[str, Resource] = {}
        for resource in self.resources:
            other = seen.setdefault(resource.namespace_prefix, resource)
            if other is not resource and other != resource:
                raise ValueError(
                    f"Namespace prefix {resource.namespace_prefix!r} declared by both "
                    f"{other.id!r} and {resource.id!r}"
                )
        object.__setattr__(self, "resources", tuple(seen.values()))
        object.__setattr__(self, "external_references", tuple(self.external_references))

    @property
    def namespace_prefixes(self) -> typing.FrozenSet[str]:
        return frozenset(r.namespace_prefix for r in self.resources)

    @staticmethod
    def builder() -> "MetaDataBuilder":
        return MetaDataBuilder()


class MetaDataBuilder(Builder[MetaData]):
    entity = "MetaData"

    def _value_type(self):
        return MetaData

    def set_created(self, value: Timestamp) -> "MetaDataBuilder":
        return self._set("created", value)

    def set_created_by(self, value: str) -> "MetaDataBuilder":
        return self._set("created_by", value)

    def set_submitted_by(self, value: str) -> "MetaDataBuilder":
        return self._set("submitted_by", value)

    def add_resource(self, value: Resource) -> "MetaDataBuilder":
        return self._add("resources", value)

    def add_all_resources(self, values: typing.Iterable[Resource]) -> "MetaDataBuilder":
        return self._add_all("resources", values)

    def add_external_reference(self, value: ExternalReference) -> "MetaDataBuilder":
        return self._add("external_references", value)

    def set_phenopacket_schema_version(self, value: str) -> "MetaDataBuilder":
        return self._set("phenopacket_schema_version", value)
