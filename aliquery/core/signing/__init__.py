"""Request signing: percent-encoding, canonical query, HMAC-SHA1 signature, URI assembly."""

from aliquery.core.signing.assembler import RequestAssembler, assemble, common_parameters, format_timestamp
from aliquery.core.signing.canonical import build_canonical_query, parse_query, stringify
from aliquery.core.signing.encoder import percent_encode
from aliquery.core.signing.signer import sign, string_to_sign, verify_signed_uri

__all__ = [
    "RequestAssembler",
    "assemble",
    "build_canonical_query",
    "common_parameters",
    "format_timestamp",
    "parse_query",
    "percent_encode",
    "sign",
    "string_to_sign",
    "stringify",
    "verify_signed_uri",
]
