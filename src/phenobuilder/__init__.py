"""
phenobuilder: immutable builders, cross-reference validation and
serialization for GA4GH phenopackets.

The model lives in plain modules (`phenobuilder.phenopacket`,
`phenobuilder.individual`, ...); only `phenobuilder.codec` needs the
phenopackets protobuf classes.
"""

__version__ = "0.1.0"
