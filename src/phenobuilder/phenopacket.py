"""
Top-level containers.

A Phenopacket gathers everything known about one subject; a Family bundles
the proband's phenopacket with those of relatives and a pedigree. Both are
frozen once built, and MetaData travels with the container it describes.
"""

import typing

from dataclasses import dataclass

from .biosample import Biosample
from .builder import Builder, freeze
from .disease import Disease
from .individual import Individual
from .metadata import MetaData
from .pedigree import Pedigree
from .phenotypic_feature import PhenotypicFeature
from .variation import VariationDescriptor


@dataclass(frozen=True)
class Phenopacket:
    """
    Attributes:
        id: Identifier of the phenopacket.
        subject: The individual described.
        phenotypic_features: Features observed on the subject, in insertion order.
        biosamples: Samples taken from the subject (or relatives).
        diseases: Diagnoses.
        variants: Variants found in the subject.
        meta_data: Provenance and declared ontology resources.
    """

    id: str
    subject: typing.Optional[Individual] = None
    phenotypic_features: typing.Tuple[PhenotypicFeature, ...] = ()
    biosamples: typing.Tuple[Biosample, ...] = ()
    diseases: typing.Tuple[Disease, ...] = ()
    variants: typing.Tuple[VariationDescriptor, ...] = ()
    meta_data: typing.Optional[MetaData] = None

    def __post_init__(self):
        freeze(self, "phenotypic_features", "biosamples", "diseases", "variants")

    @staticmethod
    def builder() -> "PhenopacketBuilder":
        return PhenopacketBuilder()


class PhenopacketBuilder(Builder[Phenopacket]):
    entity = "Phenopacket"
    required = ("id",)

    def _value_type(self):
        return Phenopacket

    def set_id(self, value: str) -> "PhenopacketBuilder":
        return self._set("id", value)

    def set_subject(self, value: Individual) -> "PhenopacketBuilder":
        return self._set("subject", value)

    def add_phenotypic_feature(self, value: PhenotypicFeature) -> "PhenopacketBuilder":
        return self._add("phenotypic_features", value)

    def add_all_phenotypic_features(self, values: typing.Iterable[PhenotypicFeature]) -> "PhenopacketBuilder":
        return self._add_all("phenotypic_features", values)

    def add_biosample(self, value: Biosample) -> "PhenopacketBuilder":
        return self._add("biosamples", value)

    def add_all_biosamples(self, values: typing.Iterable[Biosample]) -> "PhenopacketBuilder":
        return self._add_all("biosamples", values)

    def add_disease(self, value: Disease) -> "PhenopacketBuilder":
        return self._add("diseases", value)

    def add_variant(self, value: VariationDescriptor) -> "PhenopacketBuilder":
        return self._add("variants", value)

    def set_meta_data(self, value: MetaData) -> "PhenopacketBuilder":
        return self._set("meta_data", value)

    def _scalar_values(self) -> typing.Dict[str, typing.Any]:
        # fixtures for relatives routinely omit the packet id; fall back to the subject's
        values = super()._scalar_values()
        subject = values.get("subject")
        if not values.get("id") and subject is not None:
            values["id"] = subject.id
        return values


@dataclass(frozen=True)
class Family:
    """
    Attributes:
        id: Identifier of the family.
        proband: Phenopacket of the index case.
        relatives: Phenopackets of relatives.
        pedigree: Relationships and affected status of the family members.
        consanguinous_parents: True if the proband's parents are related by blood.
        meta_data: Provenance and declared ontology resources for the whole family.
    """

    id: str
    proband: Phenopacket
    relatives: typing.Tuple[Phenopacket, ...] = ()
    pedigree: typing.Optional[Pedigree] = None
    consanguinous_parents: bool = False
    meta_data: typing.Optional[MetaData] = None

    def __post_init__(self):
        freeze(self, "relatives")

    @property
    def members(self) -> typing.Tuple[Phenopacket, ...]:
        return (self.proband,) + self.relatives

    @staticmethod
    def builder() -> "FamilyBuilder":
        return FamilyBuilder()


class FamilyBuilder(Builder[Family]):
    entity = "Family"
    required = ("id", "proband")

    def _value_type(self):
        return Family

    def set_id(self, value: str) -> "FamilyBuilder":
        return self._set("id", value)

    def set_proband(self, value: Phenopacket) -> "FamilyBuilder":
        return self._set("proband", value)

    def add_relative(self, value: Phenopacket) -> "FamilyBuilder":
        return self._add("relatives", value)

    def add_all_relatives(self, values: typing.Iterable[Phenopacket]) -> "FamilyBuilder":
        return self._add_all("relatives", values)

    def set_pedigree(self, value: Pedigree) -> "FamilyBuilder":
        return self._set("pedigree", value)

    def set_consanguinous_parents(self, value: bool) -> "FamilyBuilder":
        return self._set("consanguinous_parents", value)

    def set_meta_data(self, value: MetaData) -> "FamilyBuilder":
        return self._set("meta_data", value)


Container = typing.Union[Phenopacket, Family]
