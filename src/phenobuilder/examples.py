"""
Worked examples.

Two complete containers built with the fluent API: a urothelial carcinoma
phenopacket with five biopsies, and a Bethlem myopathy family (PMID:30808312)
with a proband, both parents and a pedigree. They double as fixtures for the
test suite and the `examples` CLI command.
"""

import typing

from datetime import datetime, timezone

from .biosample import Biosample
from .disease import Disease
from .evidence import Evidence, ExternalReference
from .individual import Individual, Sex
from .metadata import MetaData
from .ontology import Resource, ontology_class
from .pedigree import AffectedStatus, Pedigree, Person
from .phenopacket import Family, Phenopacket
from .phenotypic_feature import PhenotypicFeature
from .time_element import TimeElement, Timestamp
from .variation import Allele, Expression, GeneDescriptor, VariationDescriptor

UROTHELIAL_PATIENT_ID = "patient1"
UROTHELIAL_AGE_AT_BIOPSY = "P52Y2M"

PROBAND_ID = "14 year-old boy"
MOTHER_ID = "MOTHER"
FATHER_ID = "FATHER"


def _resource(id: str, name: str, prefix: str, url: str, version: str, iri_prefix: str = "") -> Resource:
    return (
        Resource.builder()
        .set_id(id)
        .set_name(name)
        .set_namespace_prefix(prefix)
        .set_url(url)
        .set_version(version)
        .set_iri_prefix(iri_prefix)
        .build()
    )


def _finding(id: str, label: str) -> PhenotypicFeature:
    return PhenotypicFeature.builder().set_type(ontology_class(id, label)).build()


# ---------------------------
# Urothelial carcinoma
# ---------------------------


def _biopsy(sample_id: str, tissue_id: str, tissue_label: str,
            findings: typing.Sequence[typing.Tuple[str, str]]) -> Biosample:
    return (
        Biosample.builder()
        .set_id(sample_id)
        .set_individual_id(UROTHELIAL_PATIENT_ID)
        .set_age_at_collection(TimeElement.of_age(UROTHELIAL_AGE_AT_BIOPSY))
        .set_type(ontology_class(tissue_id, tissue_label))
        .add_all_phenotypic_features(_finding(i, label) for i, label in findings)
        .build()
    )


def urothelial_carcinoma_phenopacket() -> Phenopacket:
    """
    A 52-year-old man with infiltrating urothelial carcinoma (pT2b, pN2) and
    an incidental prostate adenocarcinoma, sampled at five sites.
    """
    subject = (
        Individual.builder()
        .set_id(UROTHELIAL_PATIENT_ID)
        .set_sex(Sex.MALE)
        .set_date_of_birth(Timestamp.from_iso8601("1964-03-15T00:00:00Z"))
        .build()
    )
    meta_data = (
        MetaData.builder()
        .set_created(Timestamp.from_iso8601("2019-07-01T00:00:00Z"))
        .set_created_by("Peter R.")
        .add_resource(_resource("ncit", "NCI Thesaurus OBO Edition", "NCIT",
                                "http://purl.obolibrary.org/obo/ncit.owl", "18.05d",
                                "http://purl.obolibrary.org/obo/NCIT_"))
        .add_resource(_resource("uberon", "Uber-anatomy ontology", "UBERON",
                                "http://purl.obolibrary.org/obo/uberon.owl", "2019-03-08",
                                "http://purl.obolibrary.org/obo/UBERON_"))
        .build()
    )
    return (
        Phenopacket.builder()
        .set_id("urothelial-carcinoma")
        .set_subject(subject)
        # left wall of urinary bladder; also prostatocystectomy (NCIT:C94464)
        .add_biosample(_biopsy("sample1", "UBERON:0001256", "wall of urinary bladder", [
            ("NCIT:C39853", "Infiltrating Urothelial Carcinoma"),
            # infiltration into the outer muscle layer of the bladder wall
            ("NCIT:C48766", "pT2b Stage Finding"),
            # spread to 2 or more lymph nodes in the true pelvis
            ("NCIT:C48750", "pN2 Stage Finding"),
        ]))
        .add_biosample(_biopsy("sample2", "UBERON:0002367", "prostate gland", [
            ("NCIT:C5596", "Prostate Acinar Adenocarcinoma"),
            ("NCIT:C28091", "Gleason Score 7"),
        ]))
        .add_biosample(_biopsy("sample3", "UBERON:0001223", "left ureter", [
            ("NCIT:C38757", "Negative Finding"),
        ]))
        .add_biosample(_biopsy("sample4", "UBERON:0001222", "right ureter", [
            ("NCIT:C38757", "Negative Finding"),
        ]))
        .add_biosample(_biopsy("sample5", "UBERON:0015876", "pelvic lymph node", [
            ("NCIT:C19151", "Metastasis"),
        ]))
        .add_disease(
            Disease.builder()
            .set_term(ontology_class("NCIT:C39853", "Infiltrating Urothelial Carcinoma"))
            .add_clinical_tnm_finding(ontology_class("NCIT:C48766", "pT2b Stage Finding"))
            .add_clinical_tnm_finding(ontology_class("NCIT:C48750", "pN2 Stage Finding"))
            .build()
        )
        .set_meta_data(meta_data)
        .build()
    )


# ---------------------------
# Bethlem myopathy family
# ---------------------------

BETHLEM_CITATION = (
    ExternalReference.builder()
    .set_id("PMID:30808312")
    .set_description("COL6A1 mutation leading to Bethlem myopathy with recurrent hematuria: a case report.")
    .build()
)

# NM_001848.2:c.877G>A
HETEROZYGOUS_COL6A1_VARIANT = (
    VariationDescriptor.builder()
    .set_id("id:1")
    .set_variation(Allele(sequence_id="NM_001848.2", start=876, end=877, literal_sequence="A"))
    .set_gene_context(GeneDescriptor(symbol="COL6A1", value_id="HGNC:2211"))
    .add_expression(Expression(syntax="hgvs.c", value="NM_001848.2:c.877G>A"))
    .set_vrs_ref_allele_seq("G")
    .set_description("Heterozygous 877G>A transition in COL6A1")
    .set_zygosity("heterozygous")
    .build()
)


def bethlem_proband() -> Phenopacket:
    mild = ontology_class("HP:0012825", "Mild")
    citation = (
        Evidence.builder()
        .set_evidence_code(ontology_class("ECO:0000033", "author statement supported by traceable reference"))
        .set_reference(BETHLEM_CITATION)
        .build()
    )

    decreased_fetal_movement = (
        PhenotypicFeature.builder()
        .set_type(ontology_class("HP:0001558", "Decreased fetal movement"))
        .set_onset(TimeElement.of_ontology_class(ontology_class("HP:0011461", "Fetal onset")))
        .add_evidence(citation)
        .build()
    )
    absent_cranial_nerve_abnormality = (
        PhenotypicFeature.builder()
        .set_type(ontology_class("HP:0031910", "Abnormal cranial nerve physiology"))
        .set_negated(True)
        .add_evidence(citation)
        .build()
    )
    hematuria = (
        PhenotypicFeature.builder()
        .set_type(ontology_class("HP:0012587", "Macroscopic hematuria"))
        .set_onset(TimeElement.of_age("P14Y"))
        .add_modifier(ontology_class("HP:0031796", "Recurrent"))
        .add_evidence(citation)
        .build()
    )
    motor_delay = (
        PhenotypicFeature.builder()
        .set_type(ontology_class("HP:0001270", "Motor delay"))
        .set_onset(TimeElement.of_ontology_class(ontology_class("HP:0011463", "Childhood onset")))
        .set_severity(mild)
        .build()
    )

    proband = (
        Individual.builder()
        .set_id(PROBAND_ID)
        .set_sex(Sex.MALE)
        .set_time_at_encounter(TimeElement.of_age("P14Y"))
        .build()
    )
    return (
        Phenopacket.builder()
        .set_id(PROBAND_ID)
        .set_subject(proband)
        .add_phenotypic_feature(decreased_fetal_movement)
        .add_phenotypic_feature(absent_cranial_nerve_abnormality)
        .add_phenotypic_feature(hematuria)
        .add_phenotypic_feature(motor_delay)
        .add_variant(HETEROZYGOUS_COL6A1_VARIANT)
        .build()
    )


def _unaffected_parent(individual_id: str, sex: Sex) -> Phenopacket:
    return (
        Phenopacket.builder()
        .set_subject(Individual.builder().set_id(individual_id).set_sex(sex).build())
        .build()
    )


def bethlem_pedigree() -> Pedigree:
    return (
        Pedigree.builder()
        .add_person(
            Person.builder()
            .set_individual_id(PROBAND_ID)
            .set_sex(Sex.MALE)
            .set_maternal_id(MOTHER_ID)
            .set_paternal_id(FATHER_ID)
            .set_affected_status(AffectedStatus.AFFECTED)
            .build()
        )
        .add_person(
            Person.builder()
            .set_individual_id(MOTHER_ID)
            .set_sex(Sex.FEMALE)
            .set_affected_status(AffectedStatus.UNAFFECTED)
            .build()
        )
        .add_person(
            Person.builder()
            .set_individual_id(FATHER_ID)
            .set_sex(Sex.MALE)
            .set_affected_status(AffectedStatus.UNAFFECTED)
            .build()
        )
        .build()
    )


def bethlem_myopathy_family(created: typing.Optional[Timestamp] = None) -> Family:
    """
    Example taken from PMID:30808312. `created` defaults to the current time.
    """
    if created is None:
        created = Timestamp.from_datetime(datetime.now(timezone.utc))
    meta_data = (
        MetaData.builder()
        .add_resource(_resource("hp", "human phenotype ontology", "HP",
                                "http://purl.obolibrary.org/obo/hp.owl", "2018-03-08",
                                "http://purl.obolibrary.org/obo/HP_"))
        .add_resource(_resource("geno", "Genotype Ontology", "GENO",
                                "http://purl.obolibrary.org/obo/geno.owl", "19-03-2018",
                                "http://purl.obolibrary.org/obo/GENO_"))
        .add_resource(_resource("eco", "Evidence and Conclusion Ontology", "ECO",
                                "http://purl.obolibrary.org/obo/eco.owl", "2018-11-10",
                                "http://purl.obolibrary.org/obo/ECO_"))
        .add_resource(_resource("pubmed", "PubMed", "PMID", "", "",
                                "https://www.ncbi.nlm.nih.gov/pubmed/"))
        .set_created_by("Peter R.")
        .set_created(created)
        .add_external_reference(
            ExternalReference.builder()
            .set_id("PMID:30808312")
            .set_description(
                "Bao M, et al. COL6A1 mutation leading to Bethlem myopathy with recurrent hematuria: "
                "a case report. BMC Neurol. 2019;19(1):32."
            )
            .build()
        )
        .build()
    )
    return (
        Family.builder()
        .set_id("family")
        .set_proband(bethlem_proband())
        .add_relative(_unaffected_parent(MOTHER_ID, Sex.FEMALE))
        .add_relative(_unaffected_parent(FATHER_ID, Sex.MALE))
        .set_pedigree(bethlem_pedigree())
        .set_meta_data(meta_data)
        .build()
    )
