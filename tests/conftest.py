import typing

import pytest

from phenobuilder.examples import bethlem_myopathy_family, urothelial_carcinoma_phenopacket
from phenobuilder.phenopacket import Family, Phenopacket
from phenobuilder.time_element import Timestamp


@pytest.fixture(scope="session")
def urothelial() -> Phenopacket:
    return urothelial_carcinoma_phenopacket()


@pytest.fixture(scope="session")
def bethlem() -> Family:
    # fixed creation time so encoded bytes are stable across the session
    return bethlem_myopathy_family(created=Timestamp(seconds=1_562_000_000, nanos=123_000_000))


class _Term(typing.NamedTuple):
    name: str
    is_obsolete: bool = False
    alt_term_ids: tuple = ()


class SmallOntology:
    """
    In-memory stand-in for `hpotk.MinimalOntology.get_term`, enough for the HPO label checks.
    """

    def __init__(self, terms: typing.Mapping[str, _Term]):
        self._terms = dict(terms)

    def get_term(self, term_id) -> typing.Optional[_Term]:
        return self._terms.get(str(term_id))


@pytest.fixture(scope="session")
def small_hpo() -> SmallOntology:
    return SmallOntology({
        "HP:0001558": _Term("Decreased fetal movement"),
        "HP:0011461": _Term("Fetal onset"),
        "HP:0031910": _Term("Abnormal cranial nerve physiology"),
        "HP:0012587": _Term("Macroscopic hematuria"),
        "HP:0031796": _Term("Recurrent"),
        "HP:0001270": _Term("Motor delay"),
        "HP:0011463": _Term("Childhood onset"),
        "HP:0012825": _Term("Mild"),
        "HP:0000005": _Term("Obsolete mode of inheritance", is_obsolete=True, alt_term_ids=("HP:0000006",)),
    })
