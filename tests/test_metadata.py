import pytest

from phenobuilder.metadata import SCHEMA_VERSION, MetaData
from phenobuilder.ontology import Resource


HP = Resource(id="hp", namespace_prefix="HP", name="human phenotype ontology")


def test_metadata_defaults():
    meta_data = MetaData.builder().set_created_by("Peter R.").build()
    assert meta_data.phenopacket_schema_version == SCHEMA_VERSION
    assert meta_data.resources == ()
    assert meta_data.created is None


def test_identical_resources_are_declared_once():
    meta_data = MetaData.builder().add_resource(HP).add_resource(HP).build()
    assert meta_data.resources == (HP,)
    assert meta_data.namespace_prefixes == frozenset({"HP"})


def test_conflicting_resources_for_one_prefix_raise():
    other = Resource(id="hpo", namespace_prefix="HP", name="another HPO")
    with pytest.raises(ValueError):
        MetaData(resources=(HP, other))
