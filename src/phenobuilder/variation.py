"""
Variation descriptor domain model.

Describes a genomic variant the way GA4GH VRSATILE does: a VRS `Allele`
(sequence location plus the literal alternate sequence), the gene it sits in,
HGVS and other expressions, and the allelic state (zygosity) as a GENO term.
"""

import re
import typing

from dataclasses import dataclass

from .builder import Builder
from .ontology import OntologyClass, ontology_class

# GENO allelic_state codes keyed by normalized zygosity term
_GENO_ALLELIC_STATE_CODES = {
    "heterozygous": "0000135",
    "homozygous": "0000136",
    "compound_heterozygosity": "0000402",
    "hemizygous": "0000134",
    "mosaic": "0000150",
}

_SEQUENCE = re.compile(r"^[ACGTN]*$", re.IGNORECASE)


def allelic_state(zygosity: str) -> OntologyClass:
    """
    Return the GENO term for a zygosity such as 'heterozygous' or 'hom'.
    """
    key = zygosity.strip().lower()
    key = {"het": "heterozygous", "hom": "homozygous", "hemi": "hemizygous",
           "comphet": "compound_heterozygosity"}.get(key, key)
    try:
        code = _GENO_ALLELIC_STATE_CODES[key]
    except KeyError as e:
        raise ValueError(f"No GENO code defined for zygosity {zygosity!r}") from e
    return ontology_class(f"GENO:{code}", key)


@dataclass(frozen=True)
class Allele:
    """
    A VRS allele on a reference sequence.

    Attributes:
        sequence_id: Reference sequence (e.g. 'NM_001848.2' or 'refseq:NC_000017.11').
        start: Interbase start coordinate.
        end: Interbase end coordinate (>= start).
        literal_sequence: The sequence replacing [start, end) (e.g. 'A').
    """

    sequence_id: str
    start: int
    end: int
    literal_sequence: str = ""

    def __post_init__(self):
        for attr in ("start", "end"):
            val = getattr(self, attr)
            if not isinstance(val, int) or isinstance(val, bool) or val < 0:
                raise ValueError(f"{attr} must be a non-negative integer, got {val!r}")
        if self.end < self.start:
            raise ValueError(f"end ({self.end}) must not precede start ({self.start})")
        if not _SEQUENCE.match(self.literal_sequence):
            raise ValueError(f"Invalid literal sequence: {self.literal_sequence!r}")


@dataclass(frozen=True)
class GeneDescriptor:
    """
    Attributes:
        value_id: Gene identifier (e.g. 'HGNC:2211').
        symbol: Official gene symbol (e.g. 'COL6A1').
    """

    symbol: str
    value_id: str = ""


@dataclass(frozen=True)
class Expression:
    """
    A textual representation of the variant.

    Attributes:
        syntax: e.g. 'hgvs.c', 'hgvs.g', 'spdi'.
        value: e.g. 'NM_001848.2:c.877G>A'.
        version: Version of the syntax, if relevant.
    """

    syntax: str
    value: str
    version: str = ""


@dataclass(frozen=True)
class VariationDescriptor:
    """
    Attributes:
        id: Descriptor identifier (e.g. 'id:1').
        variation: The VRS allele.
        label: Short name.
        description: Free text (e.g. 'Heterozygous 877G>A transition in COL6A1').
        gene_context: Gene the variant lies in.
        expressions: HGVS and other notations, in insertion order without duplicates.
        vrs_ref_allele_seq: Reference sequence at the allele location (e.g. 'G').
        allelic_state: Zygosity as a GENO term.
    """

    id: str
    variation: typing.Optional[Allele] = None
    label: str = ""
    description: str = ""
    gene_context: typing.Optional[GeneDescriptor] = None
    expressions: typing.Tuple[Expression, ...] = ()
    vrs_ref_allele_seq: str = ""
    allelic_state: typing.Optional[OntologyClass] = None

    def __post_init__(self):
        # drop repeated expressions, keeping first occurrence
        object.__setattr__(self, "expressions", tuple(dict.fromkeys(self.expressions)))
        if not _SEQUENCE.match(self.vrs_ref_allele_seq):
            raise ValueError(f"Invalid reference allele sequence: {self.vrs_ref_allele_seq!r}")

    @staticmethod
    def builder() -> "VariationDescriptorBuilder":
        return VariationDescriptorBuilder()


class VariationDescriptorBuilder(Builder[VariationDescriptor]):
    entity = "VariationDescriptor"
    required = ("id",)

    def _value_type(self):
        return VariationDescriptor

    def set_id(self, value: str) -> "VariationDescriptorBuilder":
        return self._set("id", value)

    def set_variation(self, value: Allele) -> "VariationDescriptorBuilder":
        return self._set("variation", value)

    def set_label(self, value: str) -> "VariationDescriptorBuilder":
        return self._set("label", value)

    def set_description(self, value: str) -> "VariationDescriptorBuilder":
        return self._set("description", value)

    def set_gene_context(self, value: GeneDescriptor) -> "VariationDescriptorBuilder":
        return self._set("gene_context", value)

    def add_expression(self, value: Expression) -> "VariationDescriptorBuilder":
        return self._add("expressions", value)

    def set_vrs_ref_allele_seq(self, value: str) -> "VariationDescriptorBuilder":
        return self._set("vrs_ref_allele_seq", value)

    def set_allelic_state(self, value: OntologyClass) -> "VariationDescriptorBuilder":
        return self._set("allelic_state", value)

    def set_zygosity(self, zygosity: str) -> "VariationDescriptorBuilder":
        return self._set("allelic_state", allelic_state(zygosity))
