"""
Binary and JSON serialization of containers.

The wire contract is the GA4GH Phenopacket Schema v2 protobuf
(`org.phenopackets.schema.v2`): binary uses protobuf wire bytes, text uses
the protobuf canonical JSON mapping (camelCase keys, fields in schema order).

Message-typed optional fields keep presence through `HasField`, so an absent
onset decodes as None and an empty-but-present one does not. Scalar fields
follow proto3: `negated=False` and "not set" are one and the same model state.

Variants of a Phenopacket travel as
`interpretations[i].diagnosis.genomicInterpretations[0].variantInterpretation.variationDescriptor`,
one interpretation per variant, in order.
"""

import logging
import typing

from google.protobuf import json_format
from google.protobuf.message import DecodeError as ProtobufDecodeError
from google.protobuf.message import Message
from phenopackets.schema.v2.phenopackets_pb2 import Family as FamilyMessage
from phenopackets.schema.v2.phenopackets_pb2 import Phenopacket as PhenopacketMessage

from .biosample import Biosample
from .disease import Disease
from .errors import DecodeError, PhenobuilderError
from .evidence import Evidence, ExternalReference
from .individual import Individual, Sex
from .metadata import MetaData
from .ontology import OntologyClass, Resource
from .pedigree import AffectedStatus, Pedigree, Person
from .phenopacket import Container, Family, Phenopacket
from .phenotypic_feature import PhenotypicFeature
from .time_element import Age, AgeRange, GestationalAge, TimeElement, TimeInterval, Timestamp
from .variation import Allele, Expression, GeneDescriptor, VariationDescriptor

logger = logging.getLogger(__name__)

_SEX_NAMES = {
    Sex.UNKNOWN: "UNKNOWN_SEX",
    Sex.FEMALE: "FEMALE",
    Sex.MALE: "MALE",
    Sex.OTHER: "OTHER_SEX",
}
_SEX_BY_NAME = {name: sex for sex, name in _SEX_NAMES.items()}


def _enum_number(message: Message, field: str, name: str) -> int:
    return message.DESCRIPTOR.fields_by_name[field].enum_type.values_by_name[name].number


def _enum_name(message: Message, field: str) -> str:
    enum_type = message.DESCRIPTOR.fields_by_name[field].enum_type
    number = getattr(message, field)
    try:
        return enum_type.values_by_number[number].name
    except KeyError:
        raise DecodeError(f"Unknown {enum_type.name} value {number}") from None


def _optional(message: Message, field: str, reader: typing.Callable[[typing.Any], typing.Any]):
    return reader(getattr(message, field)) if message.HasField(field) else None


def _required(message: Message, field: str, reader: typing.Callable[[typing.Any], typing.Any]):
    if not message.HasField(field):
        raise DecodeError(f"{message.DESCRIPTOR.name}.{field} is required")
    return reader(getattr(message, field))


# ---------------------------
# Leaf values
# ---------------------------


def _write_ontology_class(message, value: OntologyClass) -> None:
    message.SetInParent()
    message.id = value.id
    message.label = value.label


def _read_ontology_class(message) -> OntologyClass:
    return OntologyClass(id=message.id, label=message.label)


def _write_timestamp(message, value: Timestamp) -> None:
    message.SetInParent()
    message.seconds = value.seconds
    message.nanos = value.nanos


def _read_timestamp(message) -> Timestamp:
    return Timestamp(seconds=message.seconds, nanos=message.nanos)


def _write_time_element(message, value: TimeElement) -> None:
    element = value.element
    if isinstance(element, Age):
        message.age.iso8601duration = element.iso8601duration
    elif isinstance(element, AgeRange):
        message.age_range.start.iso8601duration = element.start.iso8601duration
        message.age_range.end.iso8601duration = element.end.iso8601duration
    elif isinstance(element, GestationalAge):
        message.gestational_age.SetInParent()
        message.gestational_age.weeks = element.weeks
        message.gestational_age.days = element.days
    elif isinstance(element, OntologyClass):
        message.ontology_class.SetInParent()
        _write_ontology_class(message.ontology_class, element)
    elif isinstance(element, Timestamp):
        _write_timestamp(message.timestamp, element)
    else:
        _write_timestamp(message.interval.start, element.start)
        _write_timestamp(message.interval.end, element.end)


def _read_time_element(message) -> TimeElement:
    which = message.WhichOneof("element")
    if which == "age":
        return TimeElement(Age(message.age.iso8601duration))
    if which == "age_range":
        return TimeElement(AgeRange(
            start=Age(message.age_range.start.iso8601duration),
            end=Age(message.age_range.end.iso8601duration),
        ))
    if which == "gestational_age":
        return TimeElement(GestationalAge(weeks=message.gestational_age.weeks, days=message.gestational_age.days))
    if which == "ontology_class":
        return TimeElement(_read_ontology_class(message.ontology_class))
    if which == "timestamp":
        return TimeElement(_read_timestamp(message.timestamp))
    if which == "interval":
        return TimeElement(TimeInterval(
            start=_read_timestamp(message.interval.start),
            end=_read_timestamp(message.interval.end),
        ))
    raise DecodeError("TimeElement has no element set")


def _write_external_reference(message, value: ExternalReference) -> None:
    message.SetInParent()
    message.id = value.id
    message.reference = value.reference
    message.description = value.description


def _read_external_reference(message) -> ExternalReference:
    return ExternalReference(id=message.id, reference=message.reference, description=message.description)


def _write_evidence(message, value: Evidence) -> None:
    _write_ontology_class(message.evidence_code, value.evidence_code)
    if value.reference is not None:
        _write_external_reference(message.reference, value.reference)


def _read_evidence(message) -> Evidence:
    return Evidence(
        evidence_code=_required(message, "evidence_code", _read_ontology_class),
        reference=_optional(message, "reference", _read_external_reference),
    )


def _write_resource(message, value: Resource) -> None:
    message.id = value.id
    message.name = value.name
    message.url = value.url
    message.version = value.version
    message.namespace_prefix = value.namespace_prefix
    message.iri_prefix = value.iri_prefix


def _read_resource(message) -> Resource:
    return Resource(
        id=message.id,
        namespace_prefix=message.namespace_prefix,
        name=message.name,
        url=message.url,
        version=message.version,
        iri_prefix=message.iri_prefix,
    )


# ---------------------------
# Records
# ---------------------------


def _write_optional(message, field: str, value, writer) -> None:
    if value is not None:
        sub = getattr(message, field)
        sub.SetInParent()
        writer(sub, value)


def _write_phenotypic_feature(message, value: PhenotypicFeature) -> None:
    message.description = value.description
    _write_ontology_class(message.type, value.type)
    message.excluded = value.negated
    _write_optional(message, "severity", value.severity, _write_ontology_class)
    for modifier in value.modifiers:
        _write_ontology_class(message.modifiers.add(), modifier)
    _write_optional(message, "onset", value.onset, _write_time_element)
    _write_optional(message, "resolution", value.resolution, _write_time_element)
    for evidence in value.evidence:
        _write_evidence(message.evidence.add(), evidence)


def _read_phenotypic_feature(message) -> PhenotypicFeature:
    return PhenotypicFeature(
        type=_required(message, "type", _read_ontology_class),
        negated=message.excluded,
        severity=_optional(message, "severity", _read_ontology_class),
        onset=_optional(message, "onset", _read_time_element),
        resolution=_optional(message, "resolution", _read_time_element),
        description=message.description,
        modifiers=tuple(_read_ontology_class(m) for m in message.modifiers),
        evidence=tuple(_read_evidence(e) for e in message.evidence),
    )


def _write_disease(message, value: Disease) -> None:
    _write_ontology_class(message.term, value.term)
    message.excluded = value.excluded
    _write_optional(message, "onset", value.onset, _write_time_element)
    _write_optional(message, "resolution", value.resolution, _write_time_element)
    for stage in value.disease_stage:
        _write_ontology_class(message.disease_stage.add(), stage)
    for finding in value.clinical_tnm_finding:
        _write_ontology_class(message.clinical_tnm_finding.add(), finding)
    _write_optional(message, "primary_site", value.primary_site, _write_ontology_class)
    _write_optional(message, "laterality", value.laterality, _write_ontology_class)


def _read_disease(message) -> Disease:
    return Disease(
        term=_required(message, "term", _read_ontology_class),
        excluded=message.excluded,
        onset=_optional(message, "onset", _read_time_element),
        resolution=_optional(message, "resolution", _read_time_element),
        disease_stage=tuple(_read_ontology_class(s) for s in message.disease_stage),
        clinical_tnm_finding=tuple(_read_ontology_class(f) for f in message.clinical_tnm_finding),
        primary_site=_optional(message, "primary_site", _read_ontology_class),
        laterality=_optional(message, "laterality", _read_ontology_class),
    )


def _write_biosample(message, value: Biosample) -> None:
    message.id = value.id
    message.individual_id = value.individual_id
    message.description = value.description
    _write_ontology_class(message.sampled_tissue, value.type)
    _write_optional(message, "sample_type", value.sample_type, _write_ontology_class)
    for feature in value.phenotypic_features:
        _write_phenotypic_feature(message.phenotypic_features.add(), feature)
    _write_optional(message, "time_of_collection", value.age_at_collection, _write_time_element)
    _write_optional(message, "histological_diagnosis", value.histological_diagnosis, _write_ontology_class)
    _write_optional(message, "tumor_progression", value.tumor_progression, _write_ontology_class)


def _read_biosample(message) -> Biosample:
    return Biosample(
        id=message.id,
        type=_required(message, "sampled_tissue", _read_ontology_class),
        individual_id=message.individual_id,
        age_at_collection=_optional(message, "time_of_collection", _read_time_element),
        description=message.description,
        sample_type=_optional(message, "sample_type", _read_ontology_class),
        histological_diagnosis=_optional(message, "histological_diagnosis", _read_ontology_class),
        tumor_progression=_optional(message, "tumor_progression", _read_ontology_class),
        phenotypic_features=tuple(_read_phenotypic_feature(f) for f in message.phenotypic_features),
    )


def _write_individual(message, value: Individual) -> None:
    message.id = value.id
    message.alternate_ids.extend(value.alternate_ids)
    _write_optional(message, "date_of_birth", value.date_of_birth, _write_timestamp)
    _write_optional(message, "time_at_last_encounter", value.time_at_encounter, _write_time_element)
    message.sex = _enum_number(message, "sex", _SEX_NAMES[value.sex])


def _read_individual(message) -> Individual:
    return Individual(
        id=message.id,
        sex=_SEX_BY_NAME[_enum_name(message, "sex")],
        date_of_birth=_optional(message, "date_of_birth", _read_timestamp),
        time_at_encounter=_optional(message, "time_at_last_encounter", _read_time_element),
        alternate_ids=tuple(message.alternate_ids),
    )


def _write_pedigree(message, value: Pedigree) -> None:
    for person in value.persons:
        person_message = message.persons.add()
        person_message.family_id = person.family_id
        person_message.individual_id = person.individual_id
        person_message.paternal_id = person.paternal_id or ""
        person_message.maternal_id = person.maternal_id or ""
        person_message.sex = _enum_number(person_message, "sex", _SEX_NAMES[person.sex])
        person_message.affected_status = _enum_number(
            person_message, "affected_status", person.affected_status.name
        )


def _read_pedigree(message) -> Pedigree:
    return Pedigree(persons=tuple(
        Person(
            individual_id=p.individual_id,
            sex=_SEX_BY_NAME[_enum_name(p, "sex")],
            maternal_id=p.maternal_id or None,
            paternal_id=p.paternal_id or None,
            affected_status=AffectedStatus[_enum_name(p, "affected_status")],
            family_id=p.family_id,
        )
        for p in message.persons
    ))


def _write_variation_descriptor(message, value: VariationDescriptor) -> None:
    message.id = value.id
    if value.variation is not None:
        location = message.variation.allele.sequence_location
        location.sequence_id = value.variation.sequence_id
        location.sequence_interval.start_number.SetInParent()
        location.sequence_interval.start_number.value = value.variation.start
        location.sequence_interval.end_number.SetInParent()
        location.sequence_interval.end_number.value = value.variation.end
        message.variation.allele.literal_sequence_expression.SetInParent()
        message.variation.allele.literal_sequence_expression.sequence = value.variation.literal_sequence
    message.label = value.label
    message.description = value.description
    if value.gene_context is not None:
        message.gene_context.SetInParent()
        message.gene_context.value_id = value.gene_context.value_id
        message.gene_context.symbol = value.gene_context.symbol
    for expression in value.expressions:
        expression_message = message.expressions.add()
        expression_message.syntax = expression.syntax
        expression_message.value = expression.value
        expression_message.version = expression.version
    message.vrs_ref_allele_seq = value.vrs_ref_allele_seq
    _write_optional(message, "allelic_state", value.allelic_state, _write_ontology_class)


def _read_allele(message) -> Allele:
    if not message.HasField("allele"):
        raise DecodeError(f"Unsupported variation kind {message.WhichOneof('variation')!r}")
    allele = message.allele
    if not allele.HasField("sequence_location"):
        raise DecodeError("Allele must have a sequence location")
    interval = allele.sequence_location.sequence_interval
    return Allele(
        sequence_id=allele.sequence_location.sequence_id,
        start=interval.start_number.value,
        end=interval.end_number.value,
        literal_sequence=allele.literal_sequence_expression.sequence,
    )


def _read_variation_descriptor(message) -> VariationDescriptor:
    return VariationDescriptor(
        id=message.id,
        variation=_optional(message, "variation", _read_allele),
        label=message.label,
        description=message.description,
        gene_context=_optional(
            message, "gene_context", lambda g: GeneDescriptor(symbol=g.symbol, value_id=g.value_id)
        ),
        expressions=tuple(Expression(syntax=e.syntax, value=e.value, version=e.version) for e in message.expressions),
        vrs_ref_allele_seq=message.vrs_ref_allele_seq,
        allelic_state=_optional(message, "allelic_state", _read_ontology_class),
    )


def _write_meta_data(message, value: MetaData) -> None:
    _write_optional(message, "created", value.created, _write_timestamp)
    message.created_by = value.created_by
    message.submitted_by = value.submitted_by
    for resource in value.resources:
        _write_resource(message.resources.add(), resource)
    message.phenopacket_schema_version = value.phenopacket_schema_version
    for reference in value.external_references:
        _write_external_reference(message.external_references.add(), reference)


def _read_meta_data(message) -> MetaData:
    return MetaData(
        created=_optional(message, "created", _read_timestamp),
        created_by=message.created_by,
        submitted_by=message.submitted_by,
        resources=tuple(_read_resource(r) for r in message.resources),
        external_references=tuple(_read_external_reference(r) for r in message.external_references),
        phenopacket_schema_version=message.phenopacket_schema_version,
    )


# ---------------------------
# Containers
# ---------------------------


def _write_phenopacket(message, value: Phenopacket) -> None:
    message.id = value.id
    _write_optional(message, "subject", value.subject, _write_individual)
    for feature in value.phenotypic_features:
        _write_phenotypic_feature(message.phenotypic_features.add(), feature)
    for biosample in value.biosamples:
        _write_biosample(message.biosamples.add(), biosample)

    # Variants → Interpretation → Diagnosis → GenomicInterpretation
    for index, variant in enumerate(value.variants):
        interpretation = message.interpretations.add()
        interpretation.id = f"{value.id}-interpretation-{index}"
        interpretation.progress_status = interpretation.ProgressStatus.COMPLETED
        genomic_interpretation = interpretation.diagnosis.genomic_interpretations.add()
        genomic_interpretation.subject_or_biosample_id = value.subject.id if value.subject else value.id
        genomic_interpretation.interpretation_status = (
            genomic_interpretation.InterpretationStatus.CONTRIBUTORY
        )
        _write_variation_descriptor(
            genomic_interpretation.variant_interpretation.variation_descriptor, variant
        )

    for disease in value.diseases:
        _write_disease(message.diseases.add(), disease)
    _write_optional(message, "meta_data", value.meta_data, _write_meta_data)


def _read_variants(message) -> typing.Iterator[VariationDescriptor]:
    for interpretation in message.interpretations:
        for genomic_interpretation in interpretation.diagnosis.genomic_interpretations:
            if genomic_interpretation.WhichOneof("call") != "variant_interpretation":
                continue
            variant_interpretation = genomic_interpretation.variant_interpretation
            if variant_interpretation.HasField("variation_descriptor"):
                yield _read_variation_descriptor(variant_interpretation.variation_descriptor)


def _read_phenopacket(message) -> Phenopacket:
    return Phenopacket(
        id=message.id,
        subject=_optional(message, "subject", _read_individual),
        phenotypic_features=tuple(_read_phenotypic_feature(f) for f in message.phenotypic_features),
        biosamples=tuple(_read_biosample(b) for b in message.biosamples),
        diseases=tuple(_read_disease(d) for d in message.diseases),
        variants=tuple(_read_variants(message)),
        meta_data=_optional(message, "meta_data", _read_meta_data),
    )


def _write_family(message, value: Family) -> None:
    message.id = value.id
    _write_phenopacket(message.proband, value.proband)
    for relative in value.relatives:
        _write_phenopacket(message.relatives.add(), relative)
    message.consanguinous_parents = value.consanguinous_parents
    _write_optional(message, "pedigree", value.pedigree, _write_pedigree)
    _write_optional(message, "meta_data", value.meta_data, _write_meta_data)


def _read_family(message) -> Family:
    return Family(
        id=message.id,
        proband=_required(message, "proband", _read_phenopacket),
        relatives=tuple(_read_phenopacket(r) for r in message.relatives),
        pedigree=_optional(message, "pedigree", _read_pedigree),
        consanguinous_parents=message.consanguinous_parents,
        meta_data=_optional(message, "meta_data", _read_meta_data),
    )


_MESSAGE_TYPES = {
    Phenopacket: (PhenopacketMessage, _write_phenopacket, _read_phenopacket),
    Family: (FamilyMessage, _write_family, _read_family),
}


def to_message(value: Container) -> Message:
    """Convert a Phenopacket or Family into its protobuf message."""
    message_type, writer, _ = _MESSAGE_TYPES[type(value)]
    message = message_type()
    writer(message, value)
    return message


def from_message(message: Message) -> Container:
    """Convert a protobuf Phenopacket or Family message into the frozen value."""
    for message_type, _, reader in _MESSAGE_TYPES.values():
        if isinstance(message, message_type):
            try:
                return reader(message)
            except DecodeError:
                raise
            except (PhenobuilderError, ValueError, TypeError) as e:
                raise DecodeError(f"Invalid {message.DESCRIPTOR.name}: {e}") from e
    raise DecodeError(f"Unsupported message type {type(message).__name__}")


def encode_binary(value: Container) -> bytes:
    data = to_message(value).SerializeToString(deterministic=True)
    logger.debug("Encoded %s %r to %d bytes", type(value).__name__, value.id, len(data))
    return data


def decode_binary(data: bytes, kind: typing.Type[Container] = Phenopacket) -> Container:
    """
    Decode protobuf wire bytes into a `kind` (Phenopacket or Family).
    """
    message_type = _MESSAGE_TYPES[kind][0]
    message = message_type()
    try:
        message.ParseFromString(data)
    except ProtobufDecodeError as e:
        raise DecodeError(f"Corrupt {kind.__name__} bytes: {e}") from e
    return from_message(message)


def encode_json(value: Container) -> str:
    return json_format.MessageToJson(to_message(value))


def decode_json(text: str, kind: typing.Type[Container] = Phenopacket) -> Container:
    """
    Decode canonical protobuf JSON into a `kind` (Phenopacket or Family).
    Unknown fields are rejected.
    """
    message_type = _MESSAGE_TYPES[kind][0]
    try:
        message = json_format.Parse(text, message_type())
    except json_format.ParseError as e:
        raise DecodeError(f"Invalid {kind.__name__} JSON: {e}") from e
    return from_message(message)
