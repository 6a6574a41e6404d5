import pytest

from phenobuilder.errors import MissingRequiredFieldError
from phenobuilder.variation import (
    Allele,
    Expression,
    VariationDescriptor,
    allelic_state,
)


def test_valid_allele_instantiation():
    allele = Allele(sequence_id="NM_001848.2", start=876, end=877, literal_sequence="A")
    assert allele.end - allele.start == 1


@pytest.mark.parametrize(
    "start, end, seq",
    [(-1, 1, "A"), (5, 4, "A"), (1, 2, "X"), (True, 2, "A")],
)
def test_invalid_allele_raises(start, end, seq):
    with pytest.raises(ValueError):
        Allele(sequence_id="NM_001848.2", start=start, end=end, literal_sequence=seq)


@pytest.mark.parametrize(
    "zygosity, curie",
    [("heterozygous", "GENO:0000135"), ("hom", "GENO:0000136"), ("Hemizygous", "GENO:0000134")],
)
def test_allelic_state(zygosity, curie):
    assert allelic_state(zygosity).id == curie


def test_unknown_zygosity_raises():
    with pytest.raises(ValueError):
        allelic_state("triploid")


def test_duplicate_expressions_are_dropped():
    vd = (
        VariationDescriptor.builder()
        .set_id("id:1")
        .add_expression(Expression(syntax="hgvs.g", value="17:g.7577093C>A"))
        .add_expression(Expression(syntax="hgvs.g", value="17:g.7577093C>A"))
        .add_expression(Expression(syntax="hgvs.c", value="NM_000546.5:c.743G>T"))
        .build()
    )
    assert [e.value for e in vd.expressions] == ["17:g.7577093C>A", "NM_000546.5:c.743G>T"]


def test_variation_descriptor_requires_id():
    with pytest.raises(MissingRequiredFieldError):
        VariationDescriptor.builder().set_description("no id").build()


def test_set_zygosity_sets_geno_term():
    vd = VariationDescriptor.builder().set_id("id:1").set_zygosity("het").build()
    assert vd.allelic_state.id == "GENO:0000135"
    assert vd.allelic_state.label == "heterozygous"
