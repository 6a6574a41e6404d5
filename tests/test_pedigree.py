import pytest

from phenobuilder.errors import MissingRequiredFieldError
from phenobuilder.individual import Sex
from phenobuilder.pedigree import AffectedStatus, Pedigree, Person


def test_person_defaults():
    person = Person(individual_id="MOTHER")
    assert person.sex is Sex.UNKNOWN
    assert person.affected_status is AffectedStatus.MISSING
    assert person.parent_ids == ()


def test_empty_parent_ids_normalize_to_none():
    person = Person(individual_id="child", maternal_id="", paternal_id="FATHER")
    assert person.maternal_id is None
    assert person.parent_ids == ("FATHER",)


def test_person_requires_individual_id():
    with pytest.raises(MissingRequiredFieldError) as e:
        Person.builder().set_sex(Sex.FEMALE).build()
    assert str(e.value) == "Pedigree.Person.individual_id is required"


def test_pedigree_keeps_person_order(bethlem):
    assert [p.individual_id for p in bethlem.pedigree.persons] == ["14 year-old boy", "MOTHER", "FATHER"]
    assert bethlem.pedigree.get_person("MOTHER").affected_status is AffectedStatus.UNAFFECTED
    assert bethlem.pedigree.get_person("SISTER") is None


def test_pedigree_builder_add_all():
    persons = [Person(individual_id=i) for i in ("a", "b", "c")]
    pedigree = Pedigree.builder().add_all_persons(persons).build()
    assert pedigree.persons == tuple(persons)
