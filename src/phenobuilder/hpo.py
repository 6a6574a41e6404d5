"""
HPO term checks backed by hpotk.

The builders trust caller-supplied id/label pairs. These helpers check the
HP terms of an assembled container against a loaded `hpotk.MinimalOntology`:
unknown and obsolete ids, labels that disagree with the ontology, and
(through hpotk's validators) phenotype annotation sanity.
"""

import logging
import typing

import hpotk
from hpotk.validate import (
    AnnotationPropagationValidator,
    ObsoleteTermIdsValidator,
    PhenotypicAbnormalityValidator,
    ValidationRunner,
)
from stairval.notepad import Notepad

from .phenopacket import Container, Family
from .validation import iter_ontology_classes

logger = logging.getLogger(__name__)

HPO_PREFIX = "HP"


def load_hpo(path: str) -> hpotk.MinimalOntology:
    """Load HPO from an obographs JSON file (plain or gzipped)."""
    logger.info("Loading HPO from %s", path)
    return hpotk.load_minimal_ontology(path)


def audit_hpo_terms(container: Container, hpo: hpotk.MinimalOntology, notepad: Notepad) -> None:
    """
    Warn about every HP reference in `container` that is unknown, obsolete,
    or labelled differently from the ontology. Each id/label pair is checked once.
    """
    checked: set[tuple[str, str]] = set()
    for path, term_ref in iter_ontology_classes(container):
        if term_ref.prefix != HPO_PREFIX or (term_ref.id, term_ref.label) in checked:
            continue
        checked.add((term_ref.id, term_ref.label))
        try:
            term_id = hpotk.TermId.from_curie(term_ref.id)
        except ValueError:
            notepad.add_error(f"{path}: malformed HPO id {term_ref.id!r}")
            continue

        term = hpo.get_term(term_id)
        if term is None:
            notepad.add_warning(f"{path}: HPO ID {term_ref.id!r} not found in ontology")
            continue
        if term.is_obsolete:
            replacements = ", ".join(str(t) for t in term.alt_term_ids)
            notepad.add_warning(f"{path}: {term_ref.id!r} is obsolete; use {replacements}")
        if term_ref.label and term_ref.label.lower() != term.name.lower():
            notepad.add_warning(
                f"{path}: label {term_ref.label!r} does not match ontology name {term.name!r}"
            )


def observed_phenotype_ids(container: Container) -> typing.List[hpotk.TermId]:
    """TermIds of the HP phenotypic features that are present (not negated) on each subject."""
    packets = container.members if isinstance(container, Family) else (container,)
    term_ids = []
    for packet in packets:
        for feature in packet.phenotypic_features:
            if feature.type.prefix == HPO_PREFIX and not feature.negated:
                term_ids.append(hpotk.TermId.from_curie(feature.type.id))
    return term_ids


def validate_annotations(container: Container, hpo: hpotk.MinimalOntology, notepad: Notepad) -> None:
    """
    Run hpotk's obsolete-id, phenotypic-abnormality and annotation-propagation
    validators over the observed phenotypic features and copy their findings
    into `notepad`.
    """
    term_ids = observed_phenotype_ids(container)
    if not term_ids:
        return
    runner = ValidationRunner(validators=[
        ObsoleteTermIdsValidator(hpo),
        PhenotypicAbnormalityValidator(hpo),
        AnnotationPropagationValidator(hpo),
    ])
    results = runner.validate_all(term_ids)
    for issue in results.results:
        msg = f"{type(container).__name__} {container.id!r}: {issue.message}"
        if issue.level.name == "ERROR":
            notepad.add_error(msg)
        else:
            notepad.add_warning(msg)
