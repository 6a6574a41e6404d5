"""
Cross-reference validation of assembled containers.

Validation is opt-in and batched: `audit` records every problem it finds into
a stairval `Notepad` instead of stopping at the first, and `validate` raises a
single `ValidationError` listing all of them. Checks performed:

- biosamples reference a known individual (subject or relative),
- pedigree members are known individuals and are listed once,
- maternal/paternal ids point to other members of the same pedigree,
- nobody is their own ancestor,
- every ontology CURIE uses a namespace declared in `MetaData.resources`,
- negated phenotypic features carry evidence (warning only).
"""

import dataclasses
import logging
import typing

from stairval.notepad import Notepad, create_notepad

from .errors import UnknownNamespaceError, ValidationError
from .metadata import MetaData
from .ontology import OntologyClass
from .pedigree import Pedigree
from .phenopacket import Container, Family, Phenopacket
from .phenotypic_feature import PhenotypicFeature

logger = logging.getLogger(__name__)


def iter_ontology_classes(value: typing.Any, path: str = "") -> typing.Iterator[typing.Tuple[str, OntologyClass]]:
    """
    Yield (path, OntologyClass) for every ontology reference reachable from `value`,
    depth-first in field order, e.g. ('phenotypic_features[0].type', HP:0001558).
    """
    if isinstance(value, OntologyClass):
        yield path, value
    elif isinstance(value, tuple):
        for i, item in enumerate(value):
            yield from iter_ontology_classes(item, f"{path}[{i}]")
    elif dataclasses.is_dataclass(value) and not isinstance(value, type):
        for field in dataclasses.fields(value):
            child = f"{path}.{field.name}" if path else field.name
            yield from iter_ontology_classes(getattr(value, field.name), child)


def container_meta_data(container: Container) -> typing.Optional[MetaData]:
    """A family's own MetaData governs it; fall back to the proband's."""
    if isinstance(container, Family):
        return container.meta_data or container.proband.meta_data
    return container.meta_data


def known_individual_ids(container: Container) -> typing.Set[str]:
    packets = container.members if isinstance(container, Family) else (container,)
    return {p.subject.id for p in packets if p.subject is not None}


def undeclared_curies(container: Container) -> typing.List[typing.Tuple[str, str]]:
    """
    Return (path, CURIE) for every ontology reference whose prefix is not declared.
    Ids that are not CURIEs at all (e.g. 'UBERON_0001256') are always reported.
    """
    meta_data = container_meta_data(container)
    declared = meta_data.namespace_prefixes if meta_data is not None else frozenset()
    return [
        (path, term.id)
        for path, term in iter_ontology_classes(container)
        if term.prefix not in declared
    ]


def check_namespaces(container: Container) -> None:
    """
    Raise UnknownNamespaceError listing each offending CURIE once, in first-seen order.
    """
    curies = list(dict.fromkeys(curie for _, curie in undeclared_curies(container)))
    if curies:
        raise UnknownNamespaceError(curies)


def audit(container: Container, notepad: Notepad) -> None:
    """
    Record every referential-integrity problem of `container` into `notepad`.
    """
    individuals = known_individual_ids(container)
    packets = container.members if isinstance(container, Family) else (container,)

    _audit_biosamples(packets, individuals, notepad)

    if isinstance(container, Family) and container.pedigree is not None:
        _audit_pedigree(container.pedigree, individuals, notepad)

    if container_meta_data(container) is None:
        notepad.add_error(f"{type(container).__name__} {container.id!r}: metaData is missing")
    else:
        for path, curie in undeclared_curies(container):
            notepad.add_error(
                f"{path}: CURIE {curie!r} uses a namespace not declared in metaData.resources"
            )

    for packet in packets:
        _audit_negated_features(packet, notepad)


def validate(container: Container) -> Notepad:
    """
    Audit `container` and raise ValidationError if any error was found.

    Returns the notepad so callers can inspect warnings of a valid container.
    """
    notepad = create_notepad(container.id or type(container).__name__)
    audit(container, notepad)
    errors = [issue.message for issue in notepad.errors()]
    logger.debug(
        "Validated %s %r: %d error(s), %d warning(s)",
        type(container).__name__, container.id, len(errors), len(list(notepad.warnings())),
    )
    if errors:
        raise ValidationError(errors)
    return notepad


def find_ancestry_cycles(pedigree: Pedigree) -> typing.List[typing.List[str]]:
    """
    Return every cycle in the parent graph as a list of individual ids,
    each starting from the member first reached. Iterative DFS, linear in the
    number of persons. Parent ids that are not in the pedigree are ignored here.
    """
    parents = {p.individual_id: p.parent_ids for p in pedigree.persons}
    white, grey, black = 0, 1, 2
    color = dict.fromkeys(parents, white)
    cycles: list[list[str]] = []

    for root in parents:
        if color[root] != white:
            continue
        color[root] = grey
        trail = [root]
        stack = [iter(parents[root])]
        while stack:
            nxt = next(stack[-1], None)
            if nxt is None:
                color[trail.pop()] = black
                stack.pop()
            elif nxt not in color:
                continue
            elif color[nxt] == grey:
                cycles.append(trail[trail.index(nxt):])
            elif color[nxt] == white:
                color[nxt] = grey
                trail.append(nxt)
                stack.append(iter(parents[nxt]))
    return cycles


def _audit_biosamples(packets: typing.Sequence[Phenopacket], individuals: typing.Set[str], notepad: Notepad) -> None:
    seen: set[str] = set()
    for packet in packets:
        for biosample in packet.biosamples:
            if biosample.id in seen:
                notepad.add_error(f"Biosample {biosample.id!r}: duplicate biosample id")
            seen.add(biosample.id)
            if biosample.individual_id not in individuals:
                notepad.add_error(
                    f"Biosample {biosample.id!r}: individualId {biosample.individual_id!r} "
                    f"does not match the subject or any relative",
                )


def _audit_pedigree(pedigree: Pedigree, individuals: typing.Set[str], notepad: Notepad) -> None:
    members: set[str] = set()
    for person in pedigree.persons:
        pid = person.individual_id
        if pid in members:
            notepad.add_error(f"Pedigree: individual {pid!r} is listed more than once")
        members.add(pid)
        if pid not in individuals:
            notepad.add_error(f"Pedigree: individual {pid!r} is not the proband or a relative")

    for person in pedigree.persons:
        for role, parent_id in (("maternalId", person.maternal_id), ("paternalId", person.paternal_id)):
            if not parent_id:
                continue
            if parent_id == person.individual_id:
                notepad.add_error(f"Pedigree: {person.individual_id!r} lists itself as {role}")
            elif parent_id not in members:
                notepad.add_error(
                    f"Pedigree: {role} {parent_id!r} of {person.individual_id!r} is not in the pedigree"
                )

    for cycle in find_ancestry_cycles(pedigree):
        if len(cycle) > 1:
            # self-parenting was reported above
            notepad.add_error(f"Pedigree: ancestry cycle {' -> '.join(cycle + cycle[:1])}")


def _audit_negated_features(packet: Phenopacket, notepad: Notepad) -> None:
    features: list[PhenotypicFeature] = list(packet.phenotypic_features)
    for biosample in packet.biosamples:
        features.extend(biosample.phenotypic_features)
    for feature in features:
        if feature.negated and not feature.evidence:
            notepad.add_warning(
                f"Phenopacket {packet.id!r}: negated feature {feature.type.id!r} has no evidence",
                "Cite the source that ruled the feature out",
            )
