"""
Builder contract: required fields, repeated-field order, immutability.
"""

import pytest

from phenobuilder.biosample import Biosample
from phenobuilder.errors import MissingRequiredFieldError
from phenobuilder.evidence import Evidence, ExternalReference
from phenobuilder.individual import Individual, Sex
from phenobuilder.ontology import ontology_class
from phenobuilder.phenopacket import Family, Phenopacket
from phenobuilder.phenotypic_feature import PhenotypicFeature
from phenobuilder.time_element import TimeElement


def _feature(curie: str, label: str) -> PhenotypicFeature:
    return PhenotypicFeature.builder().set_type(ontology_class(curie, label)).build()


def test_biosample_with_three_features_keeps_insertion_order():
    biosample = (
        Biosample.builder()
        .set_id("sample1")
        .set_individual_id("patient1")
        .set_type(ontology_class("UBERON_0001256", "wall of urinary bladder"))
        .set_age_at_collection(TimeElement.of_age("P52Y2M"))
        .add_phenotypic_feature(_feature("NCIT:C39853", "Infiltrating Urothelial Carcinoma"))
        .add_phenotypic_feature(_feature("NCIT:C48766", "pT2b Stage Finding"))
        .add_phenotypic_feature(_feature("NCIT:C48750", "pN2 Stage Finding"))
        .build()
    )
    assert biosample.id == "sample1"
    assert biosample.type.id == "UBERON_0001256"
    assert len(biosample.phenotypic_features) == 3
    assert [f.type.id for f in biosample.phenotypic_features] == [
        "NCIT:C39853",
        "NCIT:C48766",
        "NCIT:C48750",
    ]


def test_individual_without_id_fails_naming_id():
    with pytest.raises(MissingRequiredFieldError) as e:
        Individual.builder().set_sex(Sex.MALE).build()
    assert e.value.entity == "Individual"
    assert e.value.field == "id"
    assert "id" in str(e.value)


def test_blank_id_counts_as_missing():
    with pytest.raises(MissingRequiredFieldError):
        Individual.builder().set_id("   ").build()


@pytest.mark.parametrize(
    "builder, field",
    [
        (Biosample.builder().set_id("s1"), "type"),
        (Biosample.builder().set_type(ontology_class("UBERON:0002367", "prostate gland")), "id"),
        (PhenotypicFeature.builder().set_negated(True), "type"),
        (Evidence.builder(), "evidence_code"),
        (ExternalReference.builder().set_description("no id"), "id"),
        (Family.builder().set_id("family"), "proband"),
    ],
)
def test_missing_required_fields(builder, field):
    with pytest.raises(MissingRequiredFieldError) as e:
        builder.build()
    assert e.value.field == field


def test_evidence_order_is_preserved():
    refs = [ExternalReference(id=f"PMID:{n}") for n in (3, 1, 2)]
    code = ontology_class("ECO:0000033", "author statement supported by traceable reference")
    builder = PhenotypicFeature.builder().set_type(ontology_class("HP:0001270", "Motor delay"))
    for ref in refs:
        builder.add_evidence(Evidence(evidence_code=code, reference=ref))
    feature = builder.build()
    assert [e.reference.id for e in feature.evidence] == ["PMID:3", "PMID:1", "PMID:2"]


def test_modifiers_behave_as_ordered_set():
    recurrent = ontology_class("HP:0031796", "Recurrent")
    progressive = ontology_class("HP:0003676", "Progressive")
    feature = (
        PhenotypicFeature.builder()
        .set_type(ontology_class("HP:0012587", "Macroscopic hematuria"))
        .add_modifier(recurrent)
        .add_modifier(progressive)
        .add_modifier(recurrent)
        .build()
    )
    assert feature.modifiers == (recurrent, progressive)


def test_repeated_fields_are_immutable_tuples():
    feature = _feature("HP:0001270", "Motor delay")
    packet = Phenopacket.builder().set_id("p1").add_phenotypic_feature(feature).build()
    assert isinstance(packet.phenotypic_features, tuple)
    with pytest.raises(AttributeError):
        packet.id = "p2"


def test_direct_construction_freezes_lists():
    packet = Phenopacket(id="p1", phenotypic_features=[_feature("HP:0001270", "Motor delay")])
    assert isinstance(packet.phenotypic_features, tuple)


def test_builder_does_not_leak_later_additions():
    builder = Phenopacket.builder().set_id("p1").add_phenotypic_feature(_feature("HP:0001270", "Motor delay"))
    first = builder.build()
    builder.add_phenotypic_feature(_feature("HP:0001558", "Decreased fetal movement"))
    assert len(first.phenotypic_features) == 1


def test_phenopacket_id_falls_back_to_subject():
    packet = Phenopacket.builder().set_subject(Individual(id="MOTHER", sex=Sex.FEMALE)).build()
    assert packet.id == "MOTHER"


def test_reused_builder_takes_the_new_subject_id():
    builder = Phenopacket.builder().set_subject(Individual(id="MOTHER", sex=Sex.FEMALE))
    assert builder.build().id == "MOTHER"
    assert builder.set_subject(Individual(id="FATHER", sex=Sex.MALE)).build().id == "FATHER"


def test_negated_must_be_boolean():
    with pytest.raises(ValueError):
        PhenotypicFeature(type=ontology_class("HP:0001270", "Motor delay"), negated="yes")
