import pytest

from phenobuilder.errors import MissingRequiredFieldError
from phenobuilder.ontology import OntologyClass, Resource, curie_prefix, ontology_class


def test_ontology_class_is_pure_constructor():
    """No lookup: any id/label pair is accepted as given."""
    term = ontology_class("NCIT:C39853", "Infiltrating Urothelial Carcinoma")
    assert term == OntologyClass(id="NCIT:C39853", label="Infiltrating Urothelial Carcinoma")
    assert term.prefix == "NCIT"


@pytest.mark.parametrize(
    "curie, prefix",
    [("HP:0001558", "HP"), ("PMID:30808312", "PMID"), ("UBERON_0001256", None), ("", None)],
)
def test_curie_prefix(curie, prefix):
    assert curie_prefix(curie) == prefix


def test_ontology_class_without_label_fails():
    with pytest.raises(MissingRequiredFieldError) as e:
        OntologyClass.builder().set_id("HP:0001558").build()
    assert e.value.field == "label"


def test_ontology_class_is_immutable():
    term = ontology_class("HP:0001558", "Decreased fetal movement")
    with pytest.raises(AttributeError):
        term.id = "HP:0000001"


def test_resource_requires_namespace_prefix():
    with pytest.raises(MissingRequiredFieldError) as e:
        Resource.builder().set_id("hp").set_name("human phenotype ontology").build()
    assert str(e.value) == "Resource.namespace_prefix is required"
