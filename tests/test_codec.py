"""
Binary and JSON serialization.
"""

import dataclasses
import json

import pytest

from phenobuilder.codec import (
    decode_binary,
    decode_json,
    encode_binary,
    encode_json,
    from_message,
    to_message,
)
from phenobuilder.errors import DecodeError
from phenobuilder.ontology import ontology_class
from phenobuilder.phenopacket import Family, Phenopacket
from phenobuilder.phenotypic_feature import PhenotypicFeature
from phenobuilder.time_element import AgeRange, Age, GestationalAge, TimeElement, TimeInterval, Timestamp


def test_binary_round_trip_phenopacket(urothelial):
    assert decode_binary(encode_binary(urothelial)) == urothelial


def test_binary_round_trip_family(bethlem):
    decoded = decode_binary(encode_binary(bethlem), Family)
    assert decoded == bethlem
    # repeated-field order survives
    assert [f.type.id for f in decoded.proband.phenotypic_features] == [
        "HP:0001558", "HP:0031910", "HP:0012587", "HP:0001270",
    ]


def test_json_round_trip(urothelial, bethlem):
    assert decode_json(encode_json(urothelial)) == urothelial
    assert decode_json(encode_json(bethlem), Family) == bethlem


def test_encoding_is_deterministic(bethlem):
    assert encode_binary(bethlem) == encode_binary(bethlem)
    assert encode_json(bethlem) == encode_json(bethlem)


def test_json_uses_schema_field_names(bethlem):
    payload = json.loads(encode_json(bethlem))
    proband = payload["proband"]
    assert proband["subject"]["sex"] == "MALE"
    assert proband["phenotypicFeatures"][1]["excluded"] is True
    assert proband["phenotypicFeatures"][0]["onset"]["ontologyClass"]["id"] == "HP:0011461"
    assert proband["phenotypicFeatures"][2]["onset"]["age"]["iso8601duration"] == "P14Y"
    assert payload["pedigree"]["persons"][0]["affectedStatus"] == "AFFECTED"
    assert payload["metaData"]["resources"][0]["namespacePrefix"] == "HP"
    descriptor = (
        proband["interpretations"][0]["diagnosis"]["genomicInterpretations"][0]
        ["variantInterpretation"]["variationDescriptor"]
    )
    assert descriptor["geneContext"]["symbol"] == "COL6A1"
    assert descriptor["vrsRefAlleleSeq"] == "G"


def test_absent_optional_fields_stay_absent(bethlem):
    decoded = decode_binary(encode_binary(bethlem), Family)
    motor_delay = decoded.proband.phenotypic_features[3]
    assert motor_delay.severity is not None
    assert motor_delay.resolution is None
    assert decoded.relatives[0].meta_data is None
    assert decoded.pedigree.persons[1].maternal_id is None


def test_default_false_negated_round_trips():
    feature = PhenotypicFeature(type=ontology_class("HP:0001270", "Motor delay"), negated=False)
    packet = Phenopacket(id="p1", phenotypic_features=(feature,))
    assert decode_binary(encode_binary(packet)).phenotypic_features[0].negated is False


def test_explicit_false_negated_is_indistinguishable_from_unset():
    term = ontology_class("HP:0001270", "Motor delay")
    explicit = Phenopacket(id="p1", phenotypic_features=(PhenotypicFeature(type=term, negated=False),))
    unset = Phenopacket(id="p1", phenotypic_features=(PhenotypicFeature(type=term),))
    assert encode_binary(explicit) == encode_binary(unset)
    assert "excluded" not in json.loads(encode_json(explicit))["phenotypicFeatures"][0]


@pytest.mark.parametrize(
    "element",
    [
        AgeRange(start=Age("P10Y"), end=Age("P12Y")),
        GestationalAge(weeks=0, days=0),
        Timestamp(seconds=0),
        TimeInterval(start=Timestamp(seconds=10), end=Timestamp(seconds=20, nanos=5)),
    ],
)
def test_time_element_variants_round_trip(element):
    feature = PhenotypicFeature(type=ontology_class("HP:0001270", "Motor delay"), onset=TimeElement(element))
    packet = Phenopacket(id="p1", phenotypic_features=(feature,))
    assert decode_binary(encode_binary(packet)) == packet


def test_empty_phenopacket_round_trips():
    packet = Phenopacket(id="p1")
    assert decode_json(encode_json(packet)) == packet


def test_to_message_and_back(urothelial):
    message = to_message(urothelial)
    assert message.biosamples[0].sampled_tissue.id == "UBERON:0001256"
    assert message.biosamples[0].time_of_collection.age.iso8601duration == "P52Y2M"
    assert from_message(message) == urothelial


def test_corrupt_bytes_raise_decode_error():
    with pytest.raises(DecodeError):
        decode_binary(b"\xff\xff\xff\xff\xff")


def test_truncated_bytes_raise_decode_error(urothelial):
    data = encode_binary(urothelial)
    with pytest.raises(DecodeError):
        decode_binary(data[:-1])


def test_out_of_range_timestamp_raises_decode_error(urothelial):
    message = to_message(urothelial)
    message.subject.date_of_birth.seconds = 10**12
    with pytest.raises(DecodeError):
        decode_binary(message.SerializeToString())


def test_invalid_json_raises_decode_error():
    with pytest.raises(DecodeError):
        decode_json("{not json")


def test_unknown_json_field_raises_decode_error():
    with pytest.raises(DecodeError):
        decode_json('{"id": "p1", "colour": "blue"}')


def test_schema_mismatch_raises_decode_error():
    # a feature without a type cannot be represented
    with pytest.raises(DecodeError):
        decode_json('{"id": "p1", "phenotypicFeatures": [{"excluded": true}]}')


def test_malformed_age_raises_decode_error():
    text = '{"id": "p1", "phenotypicFeatures": [{"type": {"id": "HP:0001270", "label": "Motor delay"}, "onset": {"age": {"iso8601duration": "14 years"}}}]}'
    with pytest.raises(DecodeError):
        decode_json(text)


def test_phenopacket_variants_are_carried_as_interpretations(bethlem):
    message = to_message(bethlem.proband)
    interpretation = message.interpretations[0]
    assert interpretation.id == "14 year-old boy-interpretation-0"
    genomic = interpretation.diagnosis.genomic_interpretations[0]
    assert genomic.subject_or_biosample_id == "14 year-old boy"
    assert genomic.variant_interpretation.variation_descriptor.id == "id:1"
    allele = genomic.variant_interpretation.variation_descriptor.variation.allele
    assert allele.sequence_location.sequence_interval.start_number.value == 876
    assert allele.literal_sequence_expression.sequence == "A"


def test_zero_coordinates_survive(bethlem):
    variant = bethlem.proband.variants[0]
    moved = dataclasses.replace(variant, variation=dataclasses.replace(variant.variation, start=0, end=0, literal_sequence=""))
    packet = dataclasses.replace(bethlem.proband, variants=(moved,))
    assert decode_binary(encode_binary(packet)) == packet
