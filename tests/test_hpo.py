"""
HPO term checks, run against a small in-memory ontology.
"""

import dataclasses
from unittest.mock import Mock, patch

from stairval.notepad import create_notepad

from phenobuilder.hpo import audit_hpo_terms, observed_phenotype_ids, validate_annotations
from phenobuilder.ontology import ontology_class
from phenobuilder.phenotypic_feature import PhenotypicFeature


def _with_feature(family, feature):
    proband = dataclasses.replace(
        family.proband, phenotypic_features=family.proband.phenotypic_features + (feature,)
    )
    return dataclasses.replace(family, proband=proband)


def test_example_terms_match_ontology(bethlem, small_hpo):
    notepad = create_notepad("hpo")
    audit_hpo_terms(bethlem, small_hpo, notepad)
    assert not notepad.has_errors()
    assert not notepad.has_warnings()


def test_label_mismatch_emits_warning(bethlem, small_hpo):
    """
    If a label doesn't match the ontology name, flag a warning but keep going.
    """
    family = _with_feature(bethlem, PhenotypicFeature(type=ontology_class("HP:0001270", "Schizophrenia")))
    notepad = create_notepad("hpo")
    audit_hpo_terms(family, small_hpo, notepad)
    messages = [w.message for w in notepad.warnings()]
    assert messages == [
        "proband.phenotypic_features[4].type: label 'Schizophrenia' does not match ontology name 'Motor delay'"
    ]
    assert not notepad.has_errors()


def test_obsolete_term_emits_warning(bethlem, small_hpo):
    family = _with_feature(bethlem, PhenotypicFeature(type=ontology_class("HP:0000005", "Obsolete mode of inheritance")))
    notepad = create_notepad("hpo")
    audit_hpo_terms(family, small_hpo, notepad)
    messages = [w.message for w in notepad.warnings()]
    assert any("is obsolete; use HP:0000006" in m for m in messages)


def test_unknown_term_emits_warning(bethlem, small_hpo):
    family = _with_feature(bethlem, PhenotypicFeature(type=ontology_class("HP:9999999", "Made up")))
    notepad = create_notepad("hpo")
    audit_hpo_terms(family, small_hpo, notepad)
    assert any("not found in ontology" in w.message for w in notepad.warnings())
    assert not notepad.has_errors()


def test_non_hpo_terms_are_ignored(urothelial, small_hpo):
    notepad = create_notepad("hpo")
    audit_hpo_terms(urothelial, small_hpo, notepad)
    assert not notepad.has_warnings()


def test_observed_phenotype_ids_skip_negated(bethlem):
    ids = [str(t) for t in observed_phenotype_ids(bethlem)]
    assert ids == ["HP:0001558", "HP:0012587", "HP:0001270"]


def test_validate_annotations_copies_runner_results(bethlem, small_hpo):
    issue = Mock(message="HP:0001270 is an ancestor of HP:0001558")
    issue.level.name = "ERROR"
    with patch("phenobuilder.hpo.ValidationRunner") as runner, \
            patch("phenobuilder.hpo.ObsoleteTermIdsValidator"), \
            patch("phenobuilder.hpo.PhenotypicAbnormalityValidator"), \
            patch("phenobuilder.hpo.AnnotationPropagationValidator"):
        runner.return_value.validate_all.return_value = Mock(results=[issue])
        notepad = create_notepad("hpo")
        validate_annotations(bethlem, small_hpo, notepad)
    assert [e.message for e in notepad.errors()] == [
        "Family 'family': HP:0001270 is an ancestor of HP:0001558"
    ]
